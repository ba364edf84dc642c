from __future__ import annotations

from enum import Enum
from typing import Iterator, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class LayoutError(Exception):
    pass


class SectionType(str, Enum):
    section = "section"
    label = "label"  # text-only marker (stage, exits), never holds seats


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, allow_inf_nan=False)


class Seat(_Frozen):
    id: str
    # Local, unrotated frame of the owning section (origin at its top-left).
    x: float
    y: float
    row: str = "A"
    number: int = Field(ge=1, default=1)
    section_id: str = Field(alias="sectionId")
    seat_size: float = Field(gt=0, default=8.0, alias="seatSize")


class Section(_Frozen):
    id: str
    name: str
    color: str = "#cccccc"
    # Top-left corner in world coordinates before rotation is applied.
    x: float
    y: float
    width: float = Field(gt=0)
    height: float = Field(gt=0)
    rotation: float = 0.0  # degrees around the section center
    seats: tuple[Seat, ...] = ()
    type: SectionType = SectionType.section

    @property
    def is_label(self) -> bool:
        return self.type == SectionType.label

    def find_seat(self, seat_id: str) -> Optional[Seat]:
        for seat in self.seats:
            if seat.id == seat_id:
                return seat
        return None

    @model_validator(mode="after")
    def _check_seats(self) -> "Section":
        if self.is_label and self.seats:
            raise ValueError(f"label section {self.id!r} cannot hold seats")
        for seat in self.seats:
            if seat.section_id != self.id:
                raise ValueError(
                    f"seat {seat.id!r} points at section {seat.section_id!r} but is stored in {self.id!r}"
                )
        return self


class Layout(_Frozen):
    sections: tuple[Section, ...] = ()
    scale: float = Field(gt=0, default=1.0)  # presentation only

    @model_validator(mode="after")
    def _check_unique_sections(self) -> "Layout":
        seen: set[str] = set()
        for s in self.sections:
            if s.id in seen:
                raise ValueError(f"duplicate section id: {s.id!r}")
            seen.add(s.id)
        return self

    @property
    def total_seats(self) -> int:
        return sum(len(s.seats) for s in self.sections)

    def find_section(self, section_id: str) -> Optional[Section]:
        for s in self.sections:
            if s.id == section_id:
                return s
        return None

    def iter_seats(self) -> Iterator[Seat]:
        for s in self.sections:
            yield from s.seats

    def all_ids(self) -> set[str]:
        ids = {s.id for s in self.sections}
        ids.update(seat.id for seat in self.iter_seats())
        return ids

    def to_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)

    @classmethod
    def from_dict(cls, data: dict) -> "Layout":
        try:
            return cls.model_validate(data)
        except Exception as e:  # noqa: BLE001 - surface pydantic details as a LayoutError
            raise LayoutError(f"invalid layout data: {e}") from e


def default_layout() -> Layout:
    return Layout(
        sections=(
            Section(id="section-1", name="Section A", color="#ff6b6b", x=50, y=200, width=150, height=120),
            Section(id="section-2", name="Section B", color="#4ecdc4", x=250, y=200, width=150, height=120),
        ),
        scale=1.0,
    )
