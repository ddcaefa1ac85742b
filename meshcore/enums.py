"""Enumerations shared by shaders and meshes."""

from __future__ import annotations

import enum
from os import PathLike
from pathlib import Path


class AttributeBindingLocation(enum.IntEnum):
    """Vertex attribute slots that every shader program binds."""

    POSITION = 0
    COLOR = 1
    NORMAL = 2
    TEXTURE0 = 3


class ShaderType(enum.IntEnum):
    """The built-in shader programs, each backed by a .vsh/.fsh pair."""

    IDENTITY = 0
    IDENTITY_COLOR = 1
    IDENTITY_COLOR_TEXTURE = 2
    IDENTITY_TEXTURE = 3
    MVP_TEXTURE_DIFFUSE = 4
    MVP_COLOR = 5

    def file_stem(self) -> str:
        """Base file name of the shader sources, without extension."""
        return self.name.lower()

    def shader_paths(self, base_dir: str | PathLike[str]) -> tuple[Path, Path]:
        """Paths of the vertex and fragment shader sources under base_dir."""
        base = Path(base_dir)
        stem = self.file_stem()
        return base / f"{stem}.vsh", base / f"{stem}.fsh"


class MeshRenderType(enum.IntEnum):
    """Primitive type used when drawing a mesh."""

    TRIANGLES = 0
    LINES = 1