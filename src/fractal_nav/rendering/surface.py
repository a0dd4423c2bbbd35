from __future__ import annotations
import moderngl
import numpy as np

from fractal_nav.domain.complex_rect import ComplexRect
from fractal_nav.rendering.quad import FullscreenQuad

UNIFORM_BLOCK = "ComplexRect"
UNIFORM_BINDING = 0
UNIFORM_SIZE = 16


def pack_rect_uniform(rect: ComplexRect) -> bytes:
    """std140 layout of the ComplexRect block: four float32 scalars."""
    return np.asarray(rect.as_uniform(), dtype="<f4").tobytes()


class FractalSurface:
    """The drawable: a full-screen quad plus the uniform buffer holding its rectangle."""

    def __init__(
        self,
        ctx: moderngl.Context,
        program: moderngl.Program,
        rect: ComplexRect,
        binding: int = UNIFORM_BINDING,
    ) -> None:
        self.rect = rect
        self._binding = binding
        self._quad = FullscreenQuad(ctx, program)
        self._ubo = ctx.buffer(pack_rect_uniform(rect))

    def draw(self) -> None:
        self._ubo.bind_to_uniform_block(self._binding)
        self._quad.draw()

    def release(self) -> None:
        self._quad.release()
        self._ubo.release()


class FractalSurfaceFactory:
    def __init__(
        self,
        ctx: moderngl.Context,
        program: moderngl.Program,
        binding: int = UNIFORM_BINDING,
    ) -> None:
        self.ctx = ctx
        self.program = program
        self.binding = binding

    def __call__(self, rect: ComplexRect) -> FractalSurface:
        return FractalSurface(self.ctx, self.program, rect, self.binding)
