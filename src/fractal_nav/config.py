from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, ValidationError, model_validator

from fractal_nav.errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "FRACTAL_NAV_CONFIG"


class WindowConfig(BaseModel):
    width: int = Field(default=1000, gt=0)
    height: int = Field(default=1000, gt=0)
    caption: str = "Fractal Navigator"
    vsync: bool = True


class ViewConfig(BaseModel):
    upper_left: tuple[float, float] = (-0.75, 0.75)
    lower_right: tuple[float, float] = (0.0, 0.0)
    zoom_divisor: float = Field(default=8.0, gt=1.0)
    # reject navigations the float32 uniforms cannot represent
    guard_degenerate: bool = True

    @model_validator(mode="after")
    def _corners_distinct(self) -> ViewConfig:
        ul, lr = self.upper_left, self.lower_right
        if ul[0] == lr[0] or ul[1] == lr[1]:
            raise ValueError(f"corners {ul} and {lr} span an empty rectangle")
        return self


class InputConfig(BaseModel):
    """Names from pyglet.window.key and pyglet.window.mouse."""

    zoom_in_key: str = "UP"
    zoom_out_key: str = "DOWN"
    navigate_button: str = "LEFT"


class RenderConfig(BaseModel):
    fragment_shader: Optional[Path] = None
    clear_color: tuple[float, float, float, float] = (0.07, 0.07, 0.09, 1.0)


class ViewerConfig(BaseModel):
    window: WindowConfig = Field(default_factory=WindowConfig)
    view: ViewConfig = Field(default_factory=ViewConfig)
    input: InputConfig = Field(default_factory=InputConfig)
    render: RenderConfig = Field(default_factory=RenderConfig)
    log_level: str = "INFO"


def load_config(path: Optional[Path] = None) -> ViewerConfig:
    """
    Read the viewer config from a JSON file. Without an explicit path the
    file named by $FRACTAL_NAV_CONFIG is used; with neither, defaults apply.
    """
    if path is None:
        env_path = os.environ.get(CONFIG_ENV_VAR)
        if not env_path:
            return ViewerConfig()
        path = Path(env_path)

    try:
        raw = path.read_text("utf-8")
    except OSError as exc:
        raise ConfigError(f"cannot read config file {path}") from exc

    try:
        config = ViewerConfig.model_validate_json(raw)
    except ValidationError as exc:
        raise ConfigError(f"invalid config file {path}:\n{exc}") from exc

    logger.info("loaded config from %s", path)
    return config
