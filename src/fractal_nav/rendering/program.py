from __future__ import annotations
from importlib.resources import files
from pathlib import Path
from typing import Optional

import moderngl

from fractal_nav.errors import ConfigError
from fractal_nav.rendering.surface import UNIFORM_BINDING, UNIFORM_BLOCK

VERTEX_SHADER = "complex_plane.vert.glsl"
FRAGMENT_SHADER = "mandelbrot.frag.glsl"


def read_shader(name: str) -> str:
    return (files("fractal_nav.shaders") / name).read_text("utf-8")


def load_program(
    ctx: moderngl.Context, fragment_path: Optional[Path] = None
) -> moderngl.Program:
    """
    Compile the surface program. A fragment shader given by path replaces the
    bundled one; it must declare the ComplexRect uniform block.
    """
    vs = read_shader(VERTEX_SHADER)

    if fragment_path is None:
        fs = read_shader(FRAGMENT_SHADER)
    else:
        try:
            fs = fragment_path.read_text("utf-8")
        except OSError as exc:
            raise ConfigError(f"cannot read fragment shader {fragment_path}") from exc

    program = ctx.program(vertex_shader=vs, fragment_shader=fs)

    if UNIFORM_BLOCK not in program:
        program.release()
        raise ConfigError(f"fragment shader has no '{UNIFORM_BLOCK}' uniform block")

    block = program[UNIFORM_BLOCK]
    block.binding = UNIFORM_BINDING  # type: ignore[union-attr]

    return program
