"""Editor session: the transient UI state around a LayoutStore.

Tool choice, selection, the open context menu, the section being renamed,
zoom and pan all live here and never enter the Layout. Renderer events are
reduced to plain numbers before they reach the store.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .log import get_logger
from .models import Layout
from .store import LayoutStore


logger = get_logger(__name__)

ZOOM_STEP = 1.2
MIN_ZOOM = 0.1
MAX_ZOOM = 3.0


class Tool(str, Enum):
    select = "select"
    add_seat = "add-seat"
    add_section = "add-section"


@dataclass(frozen=True)
class ContextMenu:
    section_id: str
    x: float
    y: float


class EditorSession:
    def __init__(self, store: LayoutStore):
        self.store = store
        self.tool = Tool.select
        self.selected_id: Optional[str] = None
        self.editing_section_id: Optional[str] = None
        self.context_menu: Optional[ContextMenu] = None
        self.scale = 1.0
        self.is_panning = False

    @property
    def layout(self) -> Layout:
        return self.store.layout

    @property
    def can_drag(self) -> bool:
        return self.tool == Tool.select and not self.is_panning

    def select_tool(self, tool: Tool) -> None:
        if tool == Tool.add_section:
            # toolbar button: add right away and stay in select mode
            self.store.add_section()
            self.tool = Tool.select
            return
        self.tool = tool

    def click_section(self, section_id: str, world_x: float, world_y: float) -> None:
        if self.tool == Tool.add_seat:
            self.store.add_seat(section_id, world_x, world_y)
        else:
            self.selected_id = section_id

    def click_background(self) -> None:
        self.selected_id = None

    def drag_section_end(self, section_id: str, center_x: float, center_y: float) -> None:
        if self.can_drag:
            self.store.move_section(section_id, center_x, center_y)

    def drag_seat_end(self, section_id: str, seat_id: str, world_x: float, world_y: float) -> None:
        if self.can_drag:
            self.store.move_seat(section_id, seat_id, world_x, world_y)

    def transform_end(
        self,
        center_x: float,
        center_y: float,
        width: float,
        height: float,
        rotation: float,
        scale_x: float = 1.0,
        scale_y: float = 1.0,
    ) -> None:
        # Transformer handles report a scale factor on top of the last known size.
        if self.selected_id is None:
            return
        self.store.transform_section(
            self.selected_id,
            center_x,
            center_y,
            width * scale_x,
            height * scale_y,
            rotation,
        )

    def delete_selected(self) -> None:
        if self.selected_id is None:
            return
        self.store.delete_section(self.selected_id)
        self.selected_id = None

    def zoom(self, direction: str) -> float:
        if direction == "in":
            scale = self.scale * ZOOM_STEP
        elif direction == "out":
            scale = self.scale / ZOOM_STEP
        else:
            raise ValueError(f"zoom direction must be 'in' or 'out', got {direction!r}")
        self.scale = max(MIN_ZOOM, min(MAX_ZOOM, scale))
        logger.debug("session.zoom", scale=round(self.scale, 4))
        return self.scale

    def start_pan(self) -> None:
        self.is_panning = True

    def end_pan(self) -> None:
        self.is_panning = False

    def open_context_menu(self, section_id: str, x: float, y: float) -> None:
        self.context_menu = ContextMenu(section_id=section_id, x=x, y=y)

    def close_context_menu(self) -> None:
        self.context_menu = None

    def duplicate_from_menu(self) -> None:
        if self.context_menu is not None:
            self.store.duplicate_section(self.context_menu.section_id)
        self.context_menu = None

    def edit_name_from_menu(self) -> None:
        if self.context_menu is not None:
            self.editing_section_id = self.context_menu.section_id
        self.context_menu = None

    def commit_name(self, name: str) -> None:
        if self.editing_section_id is not None:
            self.store.rename_section(self.editing_section_id, name)
        self.editing_section_id = None

    def cancel_name_edit(self) -> None:
        self.editing_section_id = None
