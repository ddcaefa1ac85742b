"""Small mutable float vectors used for vertex attributes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator


@dataclass
class Vector2:
    """A two-component vector, typically a texture coordinate."""

    x: float = 0.0
    y: float = 0.0

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y


@dataclass
class Vector3:
    """A three-component vector: a position, normal or RGB colour."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z


@dataclass
class Vector4:
    """A four-component vector: a homogeneous position or RGBA colour."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    w: float = 0.0

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z
        yield self.w