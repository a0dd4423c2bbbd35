from __future__ import annotations
import logging
from typing import Callable, Optional, Protocol

from fractal_nav.domain.complex_rect import ComplexRect
from fractal_nav.domain.viewport_store import ViewportStore

logger = logging.getLogger(__name__)


class Drawable(Protocol):
    def draw(self) -> None: ...

    def release(self) -> None: ...


DrawableFactory = Callable[[ComplexRect], Drawable]


class RenderBridge:
    """
    Keeps exactly one drawable showing the store's current rectangle.

    redraw() retires the old drawable before building the new one, so two
    are never alive together.
    """

    def __init__(self, store: ViewportStore, factory: DrawableFactory) -> None:
        self._store = store
        self._factory = factory
        self._drawable: Optional[Drawable] = None

    @property
    def live_drawables(self) -> int:
        return 0 if self._drawable is None else 1

    def redraw(self) -> None:
        rect = self._store.get()

        self._retire()
        self._drawable = self._factory(rect)

        logger.debug("surface rebuilt for %s", rect)

    def draw(self) -> None:
        if self._drawable is None:
            return
        self._drawable.draw()

    def close(self) -> None:
        self._retire()

    def _retire(self) -> None:
        if self._drawable is None:
            return
        previous, self._drawable = self._drawable, None
        previous.release()
