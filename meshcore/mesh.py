"""A mesh that packs vertex attributes into compact GPU-style buffers.

Attributes are packed one after another, not interleaved. Positions come
first, then normals, texture coordinates and colours. Every component is
a little-endian 32-bit float. Indices are little-endian unsigned 16-bit
integers. Drawing yields a description of the draw call: the attribute
pointers to bind, the primitive and the number of indices.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Iterable, Sequence

from meshcore.enums import AttributeBindingLocation, MeshRenderType
from meshcore.vectors import Vector2, Vector3

_FLOAT_SIZE = 4
_INDEX_SIZE = 2
_MAX_INDEX = 0xFFFF


@dataclass(frozen=True)
class AttributePointer:
    """Where one vertex attribute lives inside the attribute buffer."""

    location: AttributeBindingLocation
    components: int
    offset: int
    stride: int = 0


@dataclass(frozen=True)
class DrawCall:
    """Everything needed to issue one indexed draw of a mesh."""

    primitive: MeshRenderType
    count: int
    attributes: tuple[AttributePointer, ...]
    line_width: float | None
    attribute_buffer: bytes
    index_buffer: bytes


def _flatten(values: Iterable[Vector2 | Vector3], components: int) -> list[float]:
    flat: list[float] = []
    for value in values:
        parts = [float(v) for v in value]
        if len(parts) != components:
            raise ValueError(
                f"expected {components} components per element, got {len(parts)}"
            )
        flat.extend(parts)
    return flat


class Mesh:
    """Vertex data that is uploaded once into buffers and then drawn."""

    def __init__(self, render_type: MeshRenderType = MeshRenderType.TRIANGLES) -> None:
        self.render_type = MeshRenderType(render_type)
        self.line_width = 1.0
        self._vertices: list[float] | None = None
        self._normals: list[float] | None = None
        self._uv: list[float] | None = None
        self._colors: list[float] | None = None
        self._indices: list[int] | None = None
        self._counts = {"vertices": 0, "normals": 0, "uv": 0, "colors": 0, "indices": 0}
        self._uploaded_counts: dict[str, int] = {}
        self._attribute_buffer: bytes | None = None
        self._index_buffer: bytes | None = None

    # -- attribute setters ------------------------------------------------

    def _store(self, key: str, values: Sequence | None, components: int) -> list[float]:
        setattr(self, f"_{key}", None)
        self._counts[key] = 0
        if values is None or len(values) == 0:
            raise ValueError(f"{key} must not be empty")
        flat = _flatten(values, components)
        setattr(self, f"_{key}", flat)
        self._counts[key] = len(values)
        return flat

    def set_vertices(self, vertices: Sequence[Vector3]) -> None:
        """Set the vertex positions."""
        self._store("vertices", vertices, 3)

    def set_normals(self, normals: Sequence[Vector3]) -> None:
        """Set the vertex normals."""
        self._store("normals", normals, 3)

    def set_uv(self, uv: Sequence[Vector2]) -> None:
        """Set the texture coordinates."""
        self._store("uv", uv, 2)

    def set_colors(self, colors: Sequence[Vector3]) -> None:
        """Set the RGB vertex colours."""
        self._store("colors", colors, 3)

    def set_indices(self, indices: Sequence[int]) -> None:
        """Set the element indices; each must fit in 16 bits."""
        self._indices = None
        self._counts["indices"] = 0
        if indices is None or len(indices) == 0:
            raise ValueError("indices must not be empty")
        checked = [int(i) for i in indices]
        for index in checked:
            if index < 0 or index > _MAX_INDEX:
                raise ValueError(f"index {index} does not fit in 16 bits")
        self._indices = checked
        self._counts["indices"] = len(checked)

    # -- buffers ----------------------------------------------------------

    @property
    def uploaded(self) -> bool:
        """Whether buffers have been built by upload."""
        return self._attribute_buffer is not None and self._index_buffer is not None

    @property
    def attribute_buffer(self) -> bytes | None:
        """The packed attribute buffer, or None before upload."""
        return self._attribute_buffer

    @property
    def index_buffer(self) -> bytes | None:
        """The packed index buffer, or None before upload."""
        return self._index_buffer

    def upload(self) -> None:
        """Pack the attributes and indices into buffers and drop the CPU copies."""
        if not self._vertices or not self._indices:
            raise ValueError("a mesh needs vertices and indices before upload")
        floats: list[float] = list(self._vertices)
        for key in ("normals", "uv", "colors"):
            data = getattr(self, f"_{key}")
            if data:
                floats.extend(data)
        self._attribute_buffer = struct.pack(f"<{len(floats)}f", *floats)
        self._index_buffer = struct.pack(f"<{len(self._indices)}H", *self._indices)
        self._uploaded_counts = dict(self._counts)
        for key in ("vertices", "normals", "uv", "colors", "indices"):
            setattr(self, f"_{key}", None)

    def draw(self) -> DrawCall:
        """Describe the draw of the uploaded buffers."""
        if not self.uploaded:
            raise RuntimeError("mesh has not been uploaded")
        counts = self._uploaded_counts
        offset = 0
        pointers = [AttributePointer(AttributeBindingLocation.POSITION, 3, offset)]
        offset += 3 * _FLOAT_SIZE * counts["vertices"]
        if counts["normals"] > 0:
            pointers.append(AttributePointer(AttributeBindingLocation.NORMAL, 3, offset))
            offset += 3 * _FLOAT_SIZE * counts["normals"]
        if counts["uv"] > 0:
            pointers.append(AttributePointer(AttributeBindingLocation.TEXTURE0, 2, offset))
            offset += 2 * _FLOAT_SIZE * counts["uv"]
        if counts["colors"] > 0:
            pointers.append(AttributePointer(AttributeBindingLocation.COLOR, 3, offset))
        line_width = self.line_width if self.render_type is MeshRenderType.LINES else None
        assert self._attribute_buffer is not None and self._index_buffer is not None
        return DrawCall(
            primitive=self.render_type,
            count=counts["indices"],
            attributes=tuple(pointers),
            line_width=line_width,
            attribute_buffer=self._attribute_buffer,
            index_buffer=self._index_buffer,
        )