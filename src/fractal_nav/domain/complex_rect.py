from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

import numpy as np


@dataclass(frozen=True)
class ComplexRect:
    """Visible region of the complex plane, given by two opposite corners.

    The real part of each corner is the horizontal (x) coordinate and the
    imaginary part the vertical (y) one. The corners are not required to be
    ordered, only distinct.
    """

    upper_left: complex
    lower_right: complex

    @classmethod
    def from_corners(
        cls, upper_left: Tuple[float, float], lower_right: Tuple[float, float]
    ) -> ComplexRect:
        return cls(
            upper_left=complex(*upper_left),
            lower_right=complex(*lower_right),
        )

    @property
    def center(self) -> complex:
        return (self.upper_left + self.lower_right) / 2

    @property
    def half_extent(self) -> complex:
        """Vector from the upper-left corner to the center."""
        return self.center - self.upper_left

    @property
    def width(self) -> float:
        return abs(self.lower_right.real - self.upper_left.real)

    @property
    def height(self) -> float:
        return abs(self.lower_right.imag - self.upper_left.imag)

    def point_at(self, px: float, py: float) -> complex:
        """Bilinear pick: (0, 0) is upper_left, (1, 1) is lower_right."""
        ul, lr = self.upper_left, self.lower_right
        re = (1 - px) * ul.real + px * lr.real
        imag = (1 - py) * ul.imag + py * lr.imag

        return complex(re, imag)

    def translated(self, delta: complex) -> ComplexRect:
        return ComplexRect(self.upper_left + delta, self.lower_right + delta)

    def as_uniform(self) -> Tuple[float, float, float, float]:
        """Components in uniform block order: ul_re, ul_im, lr_re, lr_im."""
        return (
            self.upper_left.real,
            self.upper_left.imag,
            self.lower_right.real,
            self.lower_right.imag,
        )

    def is_degenerate(self) -> bool:
        """True if the shader could not tell the corners apart.

        The check runs at float32, the precision the uniform block carries.
        """
        with np.errstate(over="ignore", invalid="ignore"):
            corners = np.asarray(self.as_uniform(), dtype=np.float32)
            ul_re, ul_im, lr_re, lr_im = corners
            spans = np.array([lr_re - ul_re, lr_im - ul_im], dtype=np.float32)

        if not (np.all(np.isfinite(corners)) and np.all(np.isfinite(spans))):
            return True

        return bool(np.any(spans == 0))

    def __str__(self) -> str:
        c = self.center
        return (
            f"center=({c.real:.9g}, {c.imag:.9g}) "
            f"span=({self.width:.3e} x {self.height:.3e})"
        )
