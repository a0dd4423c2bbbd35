from __future__ import annotations

import logging
import threading
from typing import Callable

from fractal_nav.domain.complex_rect import ComplexRect
from fractal_nav.errors import ViewportStorePoisonedError

logger = logging.getLogger(__name__)

RectTransform = Callable[[ComplexRect], ComplexRect]


class ViewportStore:
    """Holds the one rectangle that is currently visible.

    Writers go through update(), readers through get(). Both take the same
    lock. A transform that raises leaves the store poisoned: the failure is
    re-raised as ViewportStorePoisonedError and so is every later access.
    """

    def __init__(self, initial: ComplexRect) -> None:
        self._lock = threading.Lock()
        self._rect = initial
        self._poisoned = False

    @property
    def poisoned(self) -> bool:
        return self._poisoned

    def get(self) -> ComplexRect:
        with self._lock:
            self._check()
            # ComplexRect is frozen, handing out the reference is a snapshot
            return self._rect

    def update(self, transform: RectTransform) -> ComplexRect:
        with self._lock:
            self._check()
            try:
                new_rect = transform(self._rect)
            except Exception as exc:
                self._poisoned = True
                logger.critical("viewport transform failed, store poisoned")
                raise ViewportStorePoisonedError("viewport transform failed") from exc
            except BaseException:
                self._poisoned = True
                raise

            if not isinstance(new_rect, ComplexRect):
                self._poisoned = True
                raise ViewportStorePoisonedError(
                    f"transform returned {type(new_rect).__name__}, not ComplexRect"
                )

            self._rect = new_rect
            return new_rect

    def _check(self) -> None:
        if self._poisoned:
            raise ViewportStorePoisonedError("viewport store is poisoned")
