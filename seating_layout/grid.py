from __future__ import annotations

from .ids import IdAllocator
from .models import LayoutError, Seat, Section


class SectionTooSmallError(LayoutError):
    def __init__(self, section_id: str, spacing_x: float, spacing_y: float, min_padding: float):
        self.section_id = section_id
        self.spacing_x = spacing_x
        self.spacing_y = spacing_y
        self.min_padding = min_padding
        super().__init__(
            f"section {section_id!r} is too small for the requested grid "
            f"(spacing x={spacing_x:.2f}, y={spacing_y:.2f}, need >= {min_padding:g})"
        )


def row_label(index: int) -> str:
    # Bijective base-26: 0 -> A, 25 -> Z, 26 -> AA, 27 -> AB, ...
    if index < 0:
        raise LayoutError(f"row index must be >= 0, got {index}")
    out = ""
    n = index + 1
    while n > 0:
        n, rem = divmod(n - 1, 26)
        out = chr(ord("A") + rem) + out
    return out


def grid_spacing(extent: float, count: int, seat_size: float) -> float:
    # Free space per gap with count seats (diameter 2*seat_size) and count+1 gaps.
    return (extent - count * seat_size * 2) / (count + 1)


def generate_grid(
    section: Section,
    rows: int,
    cols: int,
    seat_size: float,
    *,
    min_padding: float = 15.0,
) -> tuple[Seat, ...]:
    """Lay out rows x cols seats uniformly in the section's local frame.

    Raises SectionTooSmallError if either axis cannot keep min_padding between
    seats and from the borders. Rotation is irrelevant here; the grid is
    axis-aligned in local space.
    """
    if rows < 1 or cols < 1:
        raise LayoutError(f"rows and cols must be positive integers (got rows={rows}, cols={cols})")
    if seat_size <= 0:
        raise LayoutError(f"seat_size must be positive (got {seat_size})")
    if section.is_label:
        raise LayoutError(f"label section {section.id!r} cannot hold seats")

    raw_x = grid_spacing(section.width, cols, seat_size)
    raw_y = grid_spacing(section.height, rows, seat_size)
    if raw_x < min_padding or raw_y < min_padding:
        raise SectionTooSmallError(section.id, raw_x, raw_y, min_padding)
    spacing_x = max(min_padding, raw_x)
    spacing_y = max(min_padding, raw_y)

    seats: list[Seat] = []
    for r in range(rows):
        label = row_label(r)
        y = spacing_y + r * (seat_size * 2 + spacing_y)
        for c in range(cols):
            number = c + 1
            seats.append(
                Seat(
                    id=IdAllocator.grid_seat_id(section.name, label, number),
                    x=spacing_x + c * (seat_size * 2 + spacing_x),
                    y=y,
                    row=label,
                    number=number,
                    section_id=section.id,
                    seat_size=seat_size,
                )
            )
    return tuple(seats)
