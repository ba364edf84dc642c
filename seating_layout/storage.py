from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from .geometry import layout_bounds
from .models import Layout, LayoutError, default_layout


def _write_json(data: dict, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2, sort_keys=True) + "\n", encoding="utf-8")


def load_layout(path: str | Path) -> Layout:
    p = Path(path)
    if not p.exists():
        raise LayoutError(f"layout file not found: {p}")

    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except Exception as e:  # noqa: BLE001
        raise LayoutError(f"failed to read layout JSON: {e}") from e
    if not isinstance(data, dict):
        raise LayoutError(f"layout JSON must be an object, got {type(data).__name__}")

    return Layout.from_dict(data)


def save_layout(layout: Layout, path: str | Path) -> None:
    _write_json(layout.to_dict(), Path(path))


def maybe_init_layout(path: str | Path, *, overwrite: bool = False) -> Layout:
    p = Path(path)
    if p.exists() and not overwrite:
        return load_layout(p)

    layout = default_layout()
    save_layout(layout, p)
    return layout


def export_document(layout: Layout, *, now: Optional[datetime] = None) -> dict:
    """Read-only export snapshot: sections, scale, exportDate, totalSeats, bounds."""
    now = now or datetime.now(timezone.utc)
    doc = layout.to_dict()
    doc["exportDate"] = now.isoformat()
    doc["totalSeats"] = layout.total_seats
    bounds = layout_bounds(layout)
    doc["bounds"] = list(bounds) if bounds is not None else None
    return doc


def export_layout(layout: Layout, path: str | Path, *, now: Optional[datetime] = None) -> dict:
    doc = export_document(layout, now=now)
    _write_json(doc, Path(path))
    return doc
