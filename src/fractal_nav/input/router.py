from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, Optional, Set, Tuple

from fractal_nav.domain.viewport_store import ViewportStore
from fractal_nav.services.navigation import NavigationEngine, NavigationRequest

logger = logging.getLogger(__name__)


class RouterState(Enum):
    IDLE = auto()
    NAVIGATING = auto()


@dataclass(frozen=True)
class InputBindings:
    """pyglet symbol / button codes that trigger navigation."""

    zoom_in_key: int
    zoom_out_key: int
    navigate_button: int


class InputRouter:
    """
    pyglet event handler turning discrete presses into navigations.

    Each press of a bound key or button performs at most one navigation. A key
    or button that is still held does not trigger again until it is released.
    Push an instance onto a window with ``window.push_handlers(router)``.
    """

    def __init__(
        self,
        store: ViewportStore,
        engine: NavigationEngine,
        request_redraw: Callable[[], None],
        surface_size: Tuple[int, int],
        bindings: InputBindings,
    ) -> None:
        self._store = store
        self._engine = engine
        self._request_redraw = request_redraw
        self._width, self._height = surface_size
        self._bindings = bindings

        self._state = RouterState.IDLE
        self._held_keys: Set[int] = set()
        self._held_buttons: Set[int] = set()

    @property
    def state(self) -> RouterState:
        return self._state

    # --- pyglet events ------------------------------------------------------
    def on_key_press(self, symbol: int, modifiers: int) -> None:
        if symbol not in (self._bindings.zoom_in_key, self._bindings.zoom_out_key):
            return
        if symbol in self._held_keys:
            return
        self._held_keys.add(symbol)

        if symbol == self._bindings.zoom_in_key:
            self.navigate(NavigationRequest.zoom_in())
        else:
            self.navigate(NavigationRequest.zoom_out())

    def on_key_release(self, symbol: int, modifiers: int) -> None:
        self._held_keys.discard(symbol)

    def on_mouse_press(self, x: int, y: int, button: int, modifiers: int) -> None:
        if button != self._bindings.navigate_button:
            return
        if button in self._held_buttons:
            return
        self._held_buttons.add(button)

        self.navigate_to_pointer((x, y))

    def on_mouse_release(self, x: int, y: int, button: int, modifiers: int) -> None:
        self._held_buttons.discard(button)

    def on_deactivate(self) -> None:
        # release events are not delivered to an unfocused window
        self._held_keys.clear()
        self._held_buttons.clear()

    # --- navigation ---------------------------------------------------------
    def normalize_pointer(
        self, pointer: Optional[Tuple[int, int]]
    ) -> Optional[Tuple[float, float]]:
        """
        Window pixel position (pyglet, bottom-left origin) to a pick point
        (top-left origin, 0..1 on both axes). None if there is no position or
        it lies outside the surface.
        """
        if pointer is None:
            return None

        x, y = pointer
        if not (0 <= x <= self._width and 0 <= y <= self._height):
            return None

        return (x / self._width, (self._height - y) / self._height)

    def navigate_to_pointer(self, pointer: Optional[Tuple[int, int]]) -> bool:
        pick = self.normalize_pointer(pointer)
        if pick is None:
            logger.debug("pointer %s outside surface, click ignored", pointer)
            return False

        px, py = pick
        return self.navigate(NavigationRequest(px=px, py=py, zoom=1.0))

    def navigate(self, request: NavigationRequest) -> bool:
        """Apply one navigation and request a redraw. False if none happened."""
        if self._state is RouterState.NAVIGATING:
            logger.debug("navigation already in progress, %s dropped", request)
            return False

        self._state = RouterState.NAVIGATING
        try:
            self._store.update(lambda rect: self._engine.navigate(rect, request))
        finally:
            self._state = RouterState.IDLE

        self._request_redraw()
        return True
