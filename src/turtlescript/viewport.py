"""Viewport size providers used to resolve `center` coordinates."""

from dataclasses import dataclass
from typing import Protocol


class Viewport(Protocol):
    def size(self) -> tuple[float, float]:
        """Current (width, height)."""
        ...


@dataclass
class FixedViewport:
    """Viewport with a settable size, e.g. for headless runs."""

    width: float = 600.0
    height: float = 400.0

    def size(self) -> tuple[float, float]:
        return (float(self.width), float(self.height))

    def resize(self, width: float, height: float):
        self.width = width
        self.height = height
