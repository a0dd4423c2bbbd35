from dataclasses import dataclass

import moderngl

from fractal_nav.domain.viewport_store import ViewportStore
from fractal_nav.input.router import InputRouter
from fractal_nav.rendering.bridge import RenderBridge
from fractal_nav.services.navigation import NavigationEngine


@dataclass
class AppContext:
    gl_ctx: moderngl.Context
    program: moderngl.Program
    store: ViewportStore
    engine: NavigationEngine
    bridge: RenderBridge
    router: InputRouter
