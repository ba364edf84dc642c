"""Pure layout commands: ``(Layout, params) -> Layout``.

A command never touches the snapshot it receives. When its target section or
seat does not exist (or the target cannot take the change, e.g. seats on a
label) it returns the very same ``Layout`` object, which is how callers tell a
no-op from a mutation.
"""

from __future__ import annotations

import random
from typing import Callable, Optional

from pydantic import ValidationError

from .geometry import section_center, top_left_from_center, world_to_local
from .grid import generate_grid
from .ids import IdAllocator
from .models import Layout, LayoutError, Seat, Section, SectionType


DEFAULT_SECTION_SIZE = (150.0, 120.0)
DEFAULT_LABEL_SIZE = (120.0, 40.0)
DEFAULT_LABEL_COLOR = "#2c3e50"


def _checked(section: Section) -> Section:
    # model_copy skips validation; run the section (and its seats) back through it
    try:
        return Section.model_validate(section.model_dump())
    except ValidationError as e:
        raise LayoutError(f"invalid values for section {section.id!r}: {e}") from e


def _with_sections(layout: Layout, sections: tuple[Section, ...]) -> Layout:
    try:
        return Layout.model_validate({"sections": sections, "scale": layout.scale})
    except ValidationError as e:
        raise LayoutError(f"invalid layout: {e}") from e


def _map_section(layout: Layout, section_id: str, fn: Callable[[Section], Optional[Section]]) -> Layout:
    for i, section in enumerate(layout.sections):
        if section.id != section_id:
            continue
        try:
            updated = fn(section)
        except ValidationError as e:
            raise LayoutError(f"invalid values for section {section_id!r}: {e}") from e
        if updated is None:
            return layout
        sections = layout.sections[:i] + (_checked(updated),) + layout.sections[i + 1 :]
        return _with_sections(layout, sections)
    return layout


def _map_seat(layout: Layout, section_id: str, seat_id: str, fn: Callable[[Section, Seat], Seat]) -> Layout:
    def apply(section: Section) -> Optional[Section]:
        for i, seat in enumerate(section.seats):
            if seat.id == seat_id:
                seats = section.seats[:i] + (fn(section, seat),) + section.seats[i + 1 :]
                return section.model_copy(update={"seats": seats})
        return None

    return _map_section(layout, section_id, apply)


def _next_slot(layout: Layout) -> tuple[float, float]:
    n = len(layout.sections)
    return 100.0 + n * 200.0, 300.0


def random_color(rng: Optional[random.Random] = None) -> str:
    hue = (rng or random).random() * 360
    return f"hsl({hue:.0f}, 70%, 60%)"


def move_section(layout: Layout, section_id: str, world_x: float, world_y: float) -> Layout:
    # (world_x, world_y) is where the section center was dropped
    def apply(section: Section) -> Section:
        x, y = top_left_from_center(world_x, world_y, section.width, section.height)
        return section.model_copy(update={"x": x, "y": y})

    return _map_section(layout, section_id, apply)


def transform_section(
    layout: Layout,
    section_id: str,
    world_x: float,
    world_y: float,
    width: float,
    height: float,
    rotation: float,
    *,
    min_size: float = 50.0,
) -> Layout:
    def apply(section: Section) -> Section:
        w = max(width, min_size)
        h = max(height, min_size)
        x, y = top_left_from_center(world_x, world_y, w, h)
        return section.model_copy(update={"x": x, "y": y, "width": w, "height": h, "rotation": rotation})

    return _map_section(layout, section_id, apply)


def rotate_section(layout: Layout, section_id: str, rotation: float) -> Layout:
    section = layout.find_section(section_id)
    if section is None:
        return layout
    cx, cy = section_center(section)
    return transform_section(
        layout, section_id, cx, cy, section.width, section.height, rotation, min_size=0.0
    )


def add_seat(
    layout: Layout,
    section_id: str,
    world_x: float,
    world_y: float,
    *,
    ids: IdAllocator,
    seat_size: float = 8.0,
) -> Layout:
    taken = layout.all_ids()

    def apply(section: Section) -> Optional[Section]:
        if section.is_label:
            return None
        x, y = world_to_local(section, world_x, world_y)
        seat = Seat(
            id=ids.seat_id(section.name, taken),
            x=x,
            y=y,
            row="A",
            number=len(section.seats) + 1,
            section_id=section.id,
            seat_size=seat_size,
        )
        return section.model_copy(update={"seats": section.seats + (seat,)})

    return _map_section(layout, section_id, apply)


def move_seat(layout: Layout, section_id: str, seat_id: str, world_x: float, world_y: float) -> Layout:
    def apply(section: Section, seat: Seat) -> Seat:
        x, y = world_to_local(section, world_x, world_y)
        return seat.model_copy(update={"x": x, "y": y})

    return _map_seat(layout, section_id, seat_id, apply)


def fill_with_seats(
    layout: Layout,
    section_id: str,
    rows: int,
    cols: int,
    seat_size: float,
    *,
    min_padding: float = 15.0,
) -> Layout:
    """Replace a section's seats with a rows x cols grid.

    Raises grid.SectionTooSmallError when the grid does not fit; the input
    layout is left as it was.
    """

    def apply(section: Section) -> Optional[Section]:
        if section.is_label:
            return None
        seats = generate_grid(section, rows, cols, seat_size, min_padding=min_padding)
        return section.model_copy(update={"seats": seats})

    return _map_section(layout, section_id, apply)


def add_section(
    layout: Layout,
    *,
    ids: IdAllocator,
    name: Optional[str] = None,
    color: Optional[str] = None,
    rng: Optional[random.Random] = None,
) -> Layout:
    x, y = _next_slot(layout)
    width, height = DEFAULT_SECTION_SIZE
    section = Section(
        id=ids.section_id(SectionType.section, layout.all_ids()),
        name=name if name is not None else f"Section {len(layout.sections) + 1}",
        color=color if color is not None else random_color(rng),
        x=x,
        y=y,
        width=width,
        height=height,
    )
    return _with_sections(layout, layout.sections + (section,))


def add_label_section(layout: Layout, *, ids: IdAllocator, name: str = "Label") -> Layout:
    x, y = _next_slot(layout)
    width, height = DEFAULT_LABEL_SIZE
    section = Section(
        id=ids.section_id(SectionType.label, layout.all_ids()),
        name=name,
        color=DEFAULT_LABEL_COLOR,
        x=x,
        y=y,
        width=width,
        height=height,
        type=SectionType.label,
    )
    return _with_sections(layout, layout.sections + (section,))


def duplicate_section(layout: Layout, section_id: str, *, ids: IdAllocator, offset: float = 20.0) -> Layout:
    source = layout.find_section(section_id)
    if source is None:
        return layout

    taken = set(layout.all_ids())
    new_id = ids.section_id(source.type, taken)
    taken.add(new_id)
    new_name = f"{source.name} (Copy)"

    seats: list[Seat] = []
    for seat in source.seats:
        preferred = IdAllocator.grid_seat_id(new_name, seat.row, seat.number)
        seat_id = ids.unique(preferred, new_name, taken)
        taken.add(seat_id)
        seats.append(seat.model_copy(update={"id": seat_id, "section_id": new_id}))

    copy = source.model_copy(
        update={
            "id": new_id,
            "name": new_name,
            "x": source.x + offset,
            "y": source.y + offset,
            "seats": tuple(seats),
        }
    )
    return _with_sections(layout, layout.sections + (_checked(copy),))


def delete_section(layout: Layout, section_id: str) -> Layout:
    sections = tuple(s for s in layout.sections if s.id != section_id)
    if len(sections) == len(layout.sections):
        return layout
    return _with_sections(layout, sections)


def delete_seat(layout: Layout, section_id: str, seat_id: str) -> Layout:
    def apply(section: Section) -> Optional[Section]:
        seats = tuple(seat for seat in section.seats if seat.id != seat_id)
        if len(seats) == len(section.seats):
            return None
        return section.model_copy(update={"seats": seats})

    return _map_section(layout, section_id, apply)


def rename_section(layout: Layout, section_id: str, name: str) -> Layout:
    return _map_section(layout, section_id, lambda s: s.model_copy(update={"name": name}))


def recolor_section(layout: Layout, section_id: str, color: str) -> Layout:
    return _map_section(layout, section_id, lambda s: s.model_copy(update={"color": color}))


def rename_seat(layout: Layout, section_id: str, seat_id: str, new_id: str) -> Layout:
    # No collision check: an existing id may be reused (see LayoutStore.rename_seat).
    return _map_seat(layout, section_id, seat_id, lambda _section, seat: seat.model_copy(update={"id": new_id}))
