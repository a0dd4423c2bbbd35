import pytest

from fractal_nav.domain.complex_rect import ComplexRect
from fractal_nav.domain.viewport_store import ViewportStore
from fractal_nav.input.router import InputBindings, InputRouter
from fractal_nav.rendering.bridge import RenderBridge
from fractal_nav.services.navigation import NavigationEngine

ZOOM_IN_KEY = 65362
ZOOM_OUT_KEY = 65364
LEFT = 1
SIZE = (1000, 1000)


class FakeDrawable:
    live = 0

    def __init__(self, rect: ComplexRect) -> None:
        self.rect = rect
        self.released = False
        self.draws = 0
        FakeDrawable.live += 1

    def draw(self) -> None:
        assert not self.released
        self.draws += 1

    def release(self) -> None:
        assert not self.released
        self.released = True
        FakeDrawable.live -= 1


@pytest.fixture
def start_rect() -> ComplexRect:
    return ComplexRect(upper_left=complex(-0.75, 0.75), lower_right=0j)


@pytest.fixture
def store(start_rect) -> ViewportStore:
    return ViewportStore(start_rect)


@pytest.fixture
def engine() -> NavigationEngine:
    return NavigationEngine()


@pytest.fixture
def drawables():
    FakeDrawable.live = 0
    made = []

    def factory(rect):
        d = FakeDrawable(rect)
        made.append(d)
        return d

    factory.made = made
    yield factory
    FakeDrawable.live = 0


@pytest.fixture
def bridge(store, drawables) -> RenderBridge:
    b = RenderBridge(store, drawables)
    b.redraw()
    return b


@pytest.fixture
def router(store, engine, bridge) -> InputRouter:
    return InputRouter(
        store=store,
        engine=engine,
        request_redraw=bridge.redraw,
        surface_size=SIZE,
        bindings=InputBindings(
            zoom_in_key=ZOOM_IN_KEY, zoom_out_key=ZOOM_OUT_KEY, navigate_button=LEFT
        ),
    )
