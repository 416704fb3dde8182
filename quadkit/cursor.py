"""The layout cursor that decides where the next widget is placed.

This is not the mouse cursor: it tracks the position inside a window at
which the next widget goes unless a free position is given.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from enum import Enum

from quadkit.geometry import Rect, Vec2


class Layout(Enum):
    """Automatic placement modes. A ``Vec2`` passed instead means a free position."""

    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"


@dataclass
class Scroll:
    """Scroll state of a window area."""

    rect: Rect
    inner_rect: Rect
    inner_rect_previous_frame: Rect
    scroll: Vec2 = field(default_factory=Vec2)
    dragging_x: bool = False
    dragging_y: bool = False
    initial_scroll: Vec2 = field(default_factory=Vec2)

    def _clamped(self, y: float) -> float:
        prev = self.inner_rect_previous_frame
        return min(max(y, prev.y), prev.h - self.rect.h + prev.y)

    def scroll_to(self, y: float) -> None:
        """Move the visible rect to ``y``, clamped to last frame's content."""
        self.rect.y = self._clamped(y)

    def update(self) -> None:
        """Re-clamp the visible rect to last frame's content."""
        self.rect.y = self._clamped(self.rect.y)


class Cursor:
    """Placement state for widgets inside one window area."""

    def __init__(self, area: Rect, margin: float) -> None:
        self.margin = margin
        self.x = margin
        self.y = margin
        self.start_x = margin
        self.start_y = margin
        self.ident = 0.0
        self.area = area
        self.next_same_line: float | None = None
        self.max_row_y = 0.0
        self.scroll = Scroll(
            rect=Rect(0.0, 0.0, area.w, area.h),
            inner_rect=Rect(0.0, 0.0, area.w, area.h),
            inner_rect_previous_frame=Rect(0.0, 0.0, area.w, area.h),
        )

    def _to_screen(self, point: Vec2) -> Vec2:
        return point + Vec2(self.area.x, self.area.y) + self.scroll.scroll + Vec2(self.ident, 0.0)

    def reset(self) -> None:
        """Start a new frame: rewind the cursor and roll over the content rect."""
        self.x = self.start_x
        self.y = self.start_y
        self.max_row_y = 0.0
        self.ident = 0.0
        self.scroll.inner_rect_previous_frame = dataclasses.replace(self.scroll.inner_rect)
        self.scroll.inner_rect = Rect(0.0, 0.0, self.area.w, self.area.h)

    def current_position(self) -> Vec2:
        """Screen position the cursor currently points at."""
        return self._to_screen(Vec2(self.x, self.y))

    def fit(self, size: Vec2, layout: Layout | Vec2) -> Vec2:
        """Reserve room for a widget of ``size`` and return its screen position.

        ``layout`` is a :class:`Layout` member, or a ``Vec2`` for a free
        position relative to the area.
        """
        if self.next_same_line is not None:
            x = self.next_same_line
            self.next_same_line = None
            if x != 0.0:
                self.x = x
            layout = Layout.HORIZONTAL

        if layout is Layout.HORIZONTAL:
            self.max_row_y = max(self.max_row_y, size.y)
            if self.x + size.x < self.area.w - self.margin * 2.0:
                res = Vec2(self.x, self.y)
            else:
                # the extra 1 makes the next vertical widget jump to a new row
                self.x = self.margin + 1.0
                self.y += self.max_row_y + self.margin
                self.max_row_y = 0.0
                res = Vec2(self.x, self.y)
            self.x += size.x + self.margin
        elif layout is Layout.VERTICAL:
            if self.x != self.margin:
                self.x = self.margin
                self.y += self.max_row_y
            res = Vec2(self.x, self.y)
            self.x += size.x + self.margin
            self.max_row_y = size.y + self.margin
        elif isinstance(layout, Vec2):
            res = layout
        else:
            raise TypeError(f"unsupported layout: {layout!r}")

        self.scroll.inner_rect = self.scroll.inner_rect.combine_with(
            Rect(res.x, res.y, size.x, size.y)
        )
        return self._to_screen(res)