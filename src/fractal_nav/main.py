import logging
import sys

import moderngl
import pyglet

from fractal_nav.app_context import AppContext
from fractal_nav.config import InputConfig, ViewerConfig, load_config
from fractal_nav.domain.complex_rect import ComplexRect
from fractal_nav.domain.viewport_store import ViewportStore
from fractal_nav.errors import ConfigError, ViewportStorePoisonedError
from fractal_nav.input.router import InputBindings, InputRouter
from fractal_nav.logs import configure_logging
from fractal_nav.rendering.bridge import RenderBridge
from fractal_nav.rendering.program import load_program
from fractal_nav.rendering.surface import FractalSurfaceFactory
from fractal_nav.services.navigation import NavigationEngine

logger = logging.getLogger("fractal_nav.main")


def resolve_bindings(config: InputConfig) -> InputBindings:
    """Turn pyglet key and button names into their codes."""
    try:
        return InputBindings(
            zoom_in_key=getattr(pyglet.window.key, config.zoom_in_key),
            zoom_out_key=getattr(pyglet.window.key, config.zoom_out_key),
            navigate_button=getattr(pyglet.window.mouse, config.navigate_button),
        )
    except AttributeError as exc:
        raise ConfigError(f"unknown key or button name: {exc}") from exc


class FractalWindow(pyglet.window.Window):
    def __init__(self, config: ViewerConfig) -> None:
        super().__init__(
            width=config.window.width,
            height=config.window.height,
            caption=config.window.caption,
            resizable=False,
            vsync=config.window.vsync,
        )
        self._clear_color = config.render.clear_color

        ctx = moderngl.create_context()
        ctx.viewport = (0, 0, self.width, self.height)

        program = load_program(ctx, config.render.fragment_shader)

        store = ViewportStore(
            ComplexRect.from_corners(config.view.upper_left, config.view.lower_right)
        )
        engine = NavigationEngine(
            zoom_divisor=config.view.zoom_divisor,
            guard_degenerate=config.view.guard_degenerate,
        )
        bridge = RenderBridge(store, FractalSurfaceFactory(ctx, program))
        router = InputRouter(
            store=store,
            engine=engine,
            request_redraw=bridge.redraw,
            surface_size=(self.width, self.height),
            bindings=resolve_bindings(config.input),
        )

        self.app = AppContext(
            gl_ctx=ctx,
            program=program,
            store=store,
            engine=engine,
            bridge=bridge,
            router=router,
        )

        # initial surface, before the first frame
        bridge.redraw()
        self.push_handlers(router)

        cursor = self.get_system_mouse_cursor(self.CURSOR_CROSSHAIR)
        self.set_mouse_cursor(cursor)

        logger.info(
            "window %dx%d showing %s", self.width, self.height, store.get()
        )

    def on_draw(self) -> None:
        self.clear()
        self.app.gl_ctx.clear(*self._clear_color)
        self.app.bridge.draw()

    def on_close(self) -> None:
        self.app.bridge.close()
        self.app.program.release()
        super().on_close()


def main() -> int:
    try:
        config = load_config()
    except ConfigError as exc:
        configure_logging()
        logger.error("%s", exc)
        return 2

    configure_logging(config.log_level)

    try:
        window = FractalWindow(config)
    except ConfigError as exc:
        logger.error("%s", exc)
        return 2

    try:
        pyglet.app.run()
    except ViewportStorePoisonedError:
        logger.critical("viewport state is corrupt, shutting down", exc_info=True)
        return 1
    finally:
        window.close()

    logger.info("bye")
    return 0


if __name__ == "__main__":
    sys.exit(main())
