"""Pan/zoom state for presenting a laid-out tree."""

from dataclasses import dataclass, replace

ZOOM_FACTOR = 1.2
MIN_SCALE = 0.3
MAX_SCALE = 3.0


@dataclass(frozen=True)
class Viewport:
    pan_x: float = 0.0
    pan_y: float = 50.0
    scale: float = 1.0


INITIAL_VIEWPORT = Viewport()


class ViewportController:
    """
    Holds the viewport for one rendering surface and applies user gestures to it.

    Scale requests outside [min_scale, max_scale] saturate at the bound. Panning
    only happens between ``begin_drag`` and ``end_drag``.
    """

    def __init__(
        self,
        initial: Viewport = INITIAL_VIEWPORT,
        zoom_factor: float = ZOOM_FACTOR,
        min_scale: float = MIN_SCALE,
        max_scale: float = MAX_SCALE,
    ):
        if min_scale <= 0 or min_scale > max_scale:
            raise ValueError(f"Invalid scale bounds: {min_scale}..{max_scale}")
        if zoom_factor <= 1:
            raise ValueError(f"Zoom factor must be greater than 1, got {zoom_factor}")
        self.zoom_factor = zoom_factor
        self.min_scale = min_scale
        self.max_scale = max_scale
        self._initial = replace(initial, scale=self._clamp(initial.scale))
        self._viewport = self._initial
        self._drag_origin: tuple[float, float] | None = None
        self.compact = False

    @property
    def viewport(self) -> Viewport:
        return self._viewport

    @property
    def is_dragging(self) -> bool:
        return self._drag_origin is not None

    @property
    def zoom_percent(self) -> int:
        return round(self._viewport.scale * 100)

    def _clamp(self, scale: float) -> float:
        return max(self.min_scale, min(scale, self.max_scale))

    def set_scale(self, scale: float) -> Viewport:
        self._viewport = replace(self._viewport, scale=self._clamp(scale))
        return self._viewport

    def zoom_in(self) -> Viewport:
        return self.set_scale(self._viewport.scale * self.zoom_factor)

    def zoom_out(self) -> Viewport:
        return self.set_scale(self._viewport.scale / self.zoom_factor)

    def reset(self) -> Viewport:
        self._viewport = self._initial
        self._drag_origin = None
        return self._viewport

    def pan_by(self, dx: float, dy: float) -> Viewport:
        self._viewport = replace(
            self._viewport, pan_x=self._viewport.pan_x + dx, pan_y=self._viewport.pan_y + dy
        )
        return self._viewport

    def begin_drag(self, x: float, y: float) -> None:
        self._drag_origin = (x, y)

    def drag_to(self, x: float, y: float) -> Viewport:
        """Move the pan offset by the pointer delta since the last drag event."""
        if self._drag_origin is None:
            return self._viewport
        last_x, last_y = self._drag_origin
        self._drag_origin = (x, y)
        return self.pan_by(x - last_x, y - last_y)

    def end_drag(self) -> None:
        self._drag_origin = None

    def center_on(self, container_width: float) -> Viewport:
        # x = 0 is the middle of every level band
        self._viewport = replace(self._viewport, pan_x=container_width / 2)
        return self._viewport

    def toggle_compact(self) -> bool:
        self.compact = not self.compact
        return self.compact

    def to_screen(self, x: float, y: float) -> tuple[float, float]:
        v = self._viewport
        return (x * v.scale + v.pan_x, y * v.scale + v.pan_y)

    def to_world(self, x: float, y: float) -> tuple[float, float]:
        v = self._viewport
        return ((x - v.pan_x) / v.scale, (y - v.pan_y) / v.scale)
