class FractalNavError(Exception):
    """Base class for all fractal_nav errors."""


class ConfigError(FractalNavError):
    """Configuration could not be loaded or resolved."""


class ViewportStorePoisonedError(FractalNavError):
    """A transform failed while holding the viewport lock.

    The stored rectangle can no longer be trusted, so the application must stop.
    """
