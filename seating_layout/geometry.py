"""Coordinate transforms between a section's local frame and the world frame.

Sections are stored axis-aligned (top-left ``x, y`` plus ``width, height``)
and rendered rotated by ``rotation`` degrees around their own center. Seats
are stored in the section's local, unrotated frame. Screen convention: y grows
downward, so a positive rotation turns a section clockwise on screen.

``local_to_world`` and ``world_to_local`` are exact inverses; every command
that maps a pointer position onto the model goes through them.
"""

from __future__ import annotations

import math
from typing import Optional

from shapely.geometry import Polygon
from shapely.ops import unary_union

from .models import Layout, Seat, Section


def _deg_to_rad(d: float) -> float:
    return d * math.pi / 180.0


def _rotate(dx: float, dy: float, deg: float) -> tuple[float, float]:
    # rotation may be any value (negative, > 360); no normalization needed
    if deg == 0:
        return dx, dy
    t = _deg_to_rad(deg)
    c = math.cos(t)
    s = math.sin(t)
    return dx * c - dy * s, dx * s + dy * c


def section_center(section: Section) -> tuple[float, float]:
    return section.x + section.width / 2.0, section.y + section.height / 2.0


def top_left_from_center(cx: float, cy: float, width: float, height: float) -> tuple[float, float]:
    return cx - width / 2.0, cy - height / 2.0


def local_to_world(section: Section, local_x: float, local_y: float) -> tuple[float, float]:
    cx, cy = section_center(section)
    rx, ry = _rotate(local_x - section.width / 2.0, local_y - section.height / 2.0, section.rotation)
    return cx + rx, cy + ry


def world_to_local(section: Section, world_x: float, world_y: float) -> tuple[float, float]:
    cx, cy = section_center(section)
    rx, ry = _rotate(world_x - cx, world_y - cy, -section.rotation)
    return rx + section.width / 2.0, ry + section.height / 2.0


def seat_world_position(section: Section, seat: Seat) -> tuple[float, float]:
    return local_to_world(section, seat.x, seat.y)


def section_outline(section: Section) -> Polygon:
    """World-frame outline of a section (its rotated rectangle)."""
    corners = [
        (0.0, 0.0),
        (section.width, 0.0),
        (section.width, section.height),
        (0.0, section.height),
    ]
    return Polygon([local_to_world(section, x, y) for x, y in corners])


def layout_bounds(layout: Layout) -> Optional[tuple[float, float, float, float]]:
    """(min_x, min_y, max_x, max_y) covering every rotated section, or None."""
    if not layout.sections:
        return None
    min_x, min_y, max_x, max_y = unary_union([section_outline(s) for s in layout.sections]).bounds
    return float(min_x), float(min_y), float(max_x), float(max_y)
