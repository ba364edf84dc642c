"""LayoutStore: the single owner of the current layout snapshot.

Every command delegates to a pure function in ``commands``. If the function
hands back a new snapshot, the store makes it current and calls the observer
with it. Unknown section/seat ids are silent no-ops: same snapshot, no
notification. Values a snapshot cannot hold (NaN, infinities, a
non-positive size) raise LayoutError and leave the current snapshot as is.
Not thread-safe; feed it commands from one thread.
"""

from __future__ import annotations

import random
from typing import Callable, Optional

from . import commands
from .config import EditorSettings, get_settings
from .grid import SectionTooSmallError
from .ids import IdAllocator
from .log import get_logger
from .models import Layout, default_layout


logger = get_logger(__name__)

LayoutObserver = Callable[[Layout], None]


class LayoutStore:
    def __init__(
        self,
        initial: Optional[Layout] = None,
        on_layout_change: Optional[LayoutObserver] = None,
        *,
        settings: Optional[EditorSettings] = None,
        ids: Optional[IdAllocator] = None,
        rng: Optional[random.Random] = None,
    ):
        self._layout = initial if initial is not None else default_layout()
        self._observer = on_layout_change
        self.settings = settings or get_settings()
        self._rng = rng or random.Random()
        self.ids = ids or IdAllocator(rng=self._rng)

    @property
    def layout(self) -> Layout:
        return self._layout

    def subscribe(self, observer: Optional[LayoutObserver]) -> None:
        self._observer = observer

    def _commit(self, command: str, new_layout: Layout, **details: object) -> Layout:
        if new_layout is self._layout:
            logger.debug("layout.noop", command=command, **details)
            return self._layout
        self._layout = new_layout
        logger.debug("layout.changed", command=command, sections=len(new_layout.sections), **details)
        if self._observer is not None:
            self._observer(new_layout)
        return new_layout

    def move_section(self, section_id: str, world_x: float, world_y: float) -> Layout:
        return self._commit(
            "move_section",
            commands.move_section(self._layout, section_id, world_x, world_y),
            section_id=section_id,
        )

    def transform_section(
        self,
        section_id: str,
        world_x: float,
        world_y: float,
        width: float,
        height: float,
        rotation: float,
    ) -> Layout:
        new_layout = commands.transform_section(
            self._layout,
            section_id,
            world_x,
            world_y,
            width,
            height,
            rotation,
            min_size=self.settings.min_section_size,
        )
        return self._commit("transform_section", new_layout, section_id=section_id, rotation=rotation)

    def rotate_section(self, section_id: str, rotation: float) -> Layout:
        return self._commit(
            "rotate_section",
            commands.rotate_section(self._layout, section_id, rotation),
            section_id=section_id,
            rotation=rotation,
        )

    def add_seat(self, section_id: str, world_x: float, world_y: float) -> Layout:
        new_layout = commands.add_seat(
            self._layout,
            section_id,
            world_x,
            world_y,
            ids=self.ids,
            seat_size=self.settings.default_seat_size,
        )
        return self._commit("add_seat", new_layout, section_id=section_id)

    def move_seat(self, section_id: str, seat_id: str, world_x: float, world_y: float) -> Layout:
        return self._commit(
            "move_seat",
            commands.move_seat(self._layout, section_id, seat_id, world_x, world_y),
            section_id=section_id,
            seat_id=seat_id,
        )

    def fill_with_seats(self, section_id: str, rows: int, cols: int, seat_size: Optional[float] = None) -> Layout:
        """Grid-fill a section. Raises SectionTooSmallError without changing anything."""
        size = self.settings.default_seat_size if seat_size is None else seat_size
        try:
            new_layout = commands.fill_with_seats(
                self._layout,
                section_id,
                rows,
                cols,
                size,
                min_padding=self.settings.min_padding,
            )
        except SectionTooSmallError as e:
            logger.warning(
                "layout.fill_rejected",
                section_id=section_id,
                rows=rows,
                cols=cols,
                seat_size=size,
                spacing_x=round(e.spacing_x, 3),
                spacing_y=round(e.spacing_y, 3),
            )
            raise
        return self._commit("fill_with_seats", new_layout, section_id=section_id, rows=rows, cols=cols)

    def add_section(self, name: Optional[str] = None, color: Optional[str] = None) -> Layout:
        new_layout = commands.add_section(self._layout, ids=self.ids, name=name, color=color, rng=self._rng)
        return self._commit("add_section", new_layout, section_id=new_layout.sections[-1].id)

    def add_label_section(self, name: str = "Label") -> Layout:
        new_layout = commands.add_label_section(self._layout, ids=self.ids, name=name)
        return self._commit("add_label_section", new_layout, section_id=new_layout.sections[-1].id)

    def duplicate_section(self, section_id: str) -> Layout:
        new_layout = commands.duplicate_section(
            self._layout, section_id, ids=self.ids, offset=self.settings.duplicate_offset
        )
        return self._commit("duplicate_section", new_layout, section_id=section_id)

    def delete_section(self, section_id: str) -> Layout:
        return self._commit("delete_section", commands.delete_section(self._layout, section_id), section_id=section_id)

    def delete_seat(self, section_id: str, seat_id: str) -> Layout:
        return self._commit(
            "delete_seat",
            commands.delete_seat(self._layout, section_id, seat_id),
            section_id=section_id,
            seat_id=seat_id,
        )

    def rename_section(self, section_id: str, name: str) -> Layout:
        return self._commit("rename_section", commands.rename_section(self._layout, section_id, name), section_id=section_id)

    def recolor_section(self, section_id: str, color: str) -> Layout:
        return self._commit("recolor_section", commands.recolor_section(self._layout, section_id, color), section_id=section_id)

    def rename_seat(self, section_id: str, seat_id: str, new_id: str) -> Layout:
        # Permissive: a colliding id is accepted, only flagged in the log.
        if new_id != seat_id and any(seat.id == new_id for seat in self._layout.iter_seats()):
            section = self._layout.find_section(section_id)
            if section is not None and section.find_seat(seat_id) is not None:
                logger.warning("layout.seat_id_collision", section_id=section_id, seat_id=seat_id, new_id=new_id)
        return self._commit(
            "rename_seat",
            commands.rename_seat(self._layout, section_id, seat_id, new_id),
            section_id=section_id,
            seat_id=seat_id,
            new_id=new_id,
        )
