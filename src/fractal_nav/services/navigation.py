from __future__ import annotations

import logging
from dataclasses import dataclass

from fractal_nav.domain.complex_rect import ComplexRect

logger = logging.getLogger(__name__)

ZOOM_DIVISOR = 8.0
CENTER = 0.5


@dataclass(frozen=True)
class NavigationRequest:
    """Where the user picked, as a fraction of the surface, and which way to zoom.

    (0, 0) is the top-left of the surface. Only the sign of zoom matters:
    positive zooms in, negative zooms out, zero only recenters.
    """

    px: float
    py: float
    zoom: float

    @classmethod
    def zoom_in(cls) -> NavigationRequest:
        return cls(px=CENTER, py=CENTER, zoom=1.0)

    @classmethod
    def zoom_out(cls) -> NavigationRequest:
        return cls(px=CENTER, py=CENTER, zoom=-1.0)


def _sign(value: float) -> float:
    return float((value > 0) - (value < 0))


class NavigationEngine:
    def __init__(
        self, zoom_divisor: float = ZOOM_DIVISOR, guard_degenerate: bool = True
    ) -> None:
        if zoom_divisor <= 1.0:
            raise ValueError(f"zoom_divisor must be > 1, got {zoom_divisor}")

        self.zoom_divisor = zoom_divisor
        self.guard_degenerate = guard_degenerate

    def recompute(
        self, current: ComplexRect, px: float, py: float, zoom_sign: float
    ) -> ComplexRect:
        """
        Recenter on the picked point, then move both corners towards the
        center (zoom in) or away from it (zoom out) by 1/zoom_divisor of the
        half extent. With the default divisor each zoom in scales the extent
        by 7/8 and each zoom out by 9/8.
        """
        c = current.center
        m = current.point_at(px, py)

        moved = current.translated(m - c)

        padding = moved.half_extent / self.zoom_divisor * _sign(zoom_sign)

        return ComplexRect(
            upper_left=moved.upper_left + padding,
            lower_right=moved.lower_right - padding,
        )

    def navigate(self, current: ComplexRect, request: NavigationRequest) -> ComplexRect:
        """recompute() guarded against rectangles the shader cannot render."""
        new_rect = self.recompute(current, request.px, request.py, request.zoom)

        if self.guard_degenerate and new_rect.is_degenerate():
            logger.warning(
                "navigation to (%.3f, %.3f) zoom=%+.0f rejected, "
                "rectangle would degenerate: %s",
                request.px,
                request.py,
                request.zoom,
                current,
            )
            return current

        logger.debug("navigated to %s", new_rect)
        return new_rect
