"""Skeleton bones, animation stacks and sub-mesh containers.

Matrices are 16 floats in column-major order, the layout a shader
uniform expects. Source matrices given as four rows of four values use
the row-vector convention, with the translation in the last row.
Flattening them row by row gives the column-major form.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Sequence

from meshcore.better_list import BetterList
from meshcore.vectors import Vector2, Vector3


def identity_matrix() -> list[float]:
    """A 4x4 identity matrix as 16 column-major floats."""
    return [1.0 if row == col else 0.0 for col in range(4) for row in range(4)]


def rows_to_column_major(rows: Sequence[Sequence[float]]) -> list[float]:
    """Flatten a 4x4 row-vector matrix into 16 column-major floats."""
    if len(rows) != 4 or any(len(row) != 4 for row in rows):
        raise ValueError("expected a 4x4 matrix")
    return [float(value) for row in rows for value in row]


def _checked_matrix(matrix: Sequence[float]) -> list[float]:
    values = [float(v) for v in matrix]
    if len(values) != 16:
        raise ValueError("a matrix needs exactly 16 values")
    return values


def _invert_rows(rows: Sequence[Sequence[float]]) -> list[list[float]]:
    """Invert a 4x4 matrix by Gauss-Jordan elimination with partial pivoting."""
    size = 4
    work = [
        [float(v) for v in row] + [1.0 if i == j else 0.0 for j in range(size)]
        for i, row in enumerate(rows)
    ]
    for col in range(size):
        pivot = max(range(col, size), key=lambda r: abs(work[r][col]))
        if abs(work[pivot][col]) < 1e-12:
            raise ValueError("matrix is singular and cannot be inverted")
        work[col], work[pivot] = work[pivot], work[col]
        scale = work[col][col]
        work[col] = [v / scale for v in work[col]]
        for r in range(size):
            if r != col and work[r][col] != 0.0:
                factor = work[r][col]
                work[r] = [a - factor * b for a, b in zip(work[r], work[col])]
    return [row[size:] for row in work]


@dataclass(eq=False)
class Bone:
    """A skeleton bone with its skin indices, weights and bind pose."""

    name: str | None = None
    children: list[Bone] = field(default_factory=list)
    indices: list[int] | None = None
    weights: list[float] | None = None
    num_indices: int = 0
    bindpose: list[float] = field(default_factory=identity_matrix)
    bindpose_inverse: list[float] = field(default_factory=identity_matrix)

    def add_child(self, bone: Bone) -> None:
        """Attach bone as the last child."""
        if bone is None:
            raise ValueError("a child bone is required")
        self.children.append(bone)

    def child(self, index: int) -> Bone | None:
        """Child at index, or None when there is none."""
        if index < 0 or index >= len(self.children):
            return None
        return self.children[index]

    def num_children(self) -> int:
        """Number of direct children."""
        return len(self.children)

    def set_indices(self, indices: Sequence[int] | None) -> None:
        """Set the control-point indices; their count must be num_indices."""
        if indices is None:
            self.indices = None
            return
        if len(indices) != self.num_indices:
            raise ValueError(
                f"expected {self.num_indices} indices, got {len(indices)}"
            )
        self.indices = [int(i) for i in indices]

    def set_weights(self, weights: Sequence[float] | None) -> None:
        """Set the control-point weights; their count must be num_indices."""
        if weights is None:
            self.weights = None
            return
        if len(weights) != self.num_indices:
            raise ValueError(
                f"expected {self.num_indices} weights, got {len(weights)}"
            )
        self.weights = [float(w) for w in weights]

    def set_bindpose(self, matrix: Sequence[float]) -> None:
        """Set the bind pose from 16 column-major floats."""
        self.bindpose = _checked_matrix(matrix)

    def set_bindpose_inverse(self, matrix: Sequence[float]) -> None:
        """Set the inverse bind pose from 16 column-major floats."""
        self.bindpose_inverse = _checked_matrix(matrix)


@dataclass
class AnimationStack:
    """A named animation stack."""

    name: str | None = None


@dataclass
class SubMesh:
    """Geometry of one mesh node; absent attributes are None."""

    vertices: BetterList[Vector3] | None = None
    uv: BetterList[Vector2] | None = None
    normals: BetterList[Vector3] | None = None
    indices: BetterList[int] | None = None


class Skeleton:
    """A bone hierarchy with a single root, bones kept in creation order."""

    def __init__(self) -> None:
        self.bones: list[Bone] = []

    def __len__(self) -> int:
        return len(self.bones)

    def __iter__(self) -> Iterator[Bone]:
        return iter(list(self.bones))

    def add_bone(self, name: str | None, parent_index: int = -1) -> int:
        """Create a bone under the bone at parent_index and return its index.

        A parent_index of -1 makes the bone the root, which is allowed
        only while the skeleton is empty.
        """
        if parent_index == -1:
            if self.bones:
                raise ValueError("The root bone must be only one.")
        elif parent_index < 0 or parent_index >= len(self.bones):
            raise IndexError(f"no bone at parent index {parent_index}")
        bone = Bone(name=name)
        self.bones.append(bone)
        if parent_index != -1:
            self.bones[parent_index].add_child(bone)
        return len(self.bones) - 1

    def root_bone(self) -> Bone | None:
        """The root bone, or None for an empty skeleton."""
        return self.bones[0] if self.bones else None

    def find_bone(self, name: str | None) -> Bone | None:
        """First bone with the given name, scanning in creation order.

        The scan stops with None at the first bone where exactly one of
        the bone's name and the wanted name is None.
        """
        for bone in self.bones:
            if bone.name is None and name is None:
                return bone
            if bone.name is None or name is None:
                return None
            if bone.name == name:
                return bone
        return None

    def bind_skin(
        self,
        bone_name: str,
        indices: Sequence[int],
        weights: Sequence[float],
        bindpose: Sequence[Sequence[float]],
        bindpose_inverse: Sequence[Sequence[float]] | None = None,
    ) -> Bone:
        """Attach skin data of a cluster to the bone it links to.

        Matrices are 4x4 rows; the inverse is computed when not given.
        """
        bone = self.find_bone(bone_name)
        if bone is None:
            raise KeyError(
                "The skin link to a bone, but cannot find the definition "
                f"of the bone:{bone_name}"
            )
        if len(weights) != len(indices):
            raise ValueError("indices and weights must have the same length")
        bone.num_indices = len(indices)
        bone.set_indices(indices)
        bone.set_weights(weights)
        bone.set_bindpose(rows_to_column_major(bindpose))
        if bindpose_inverse is None:
            bindpose_inverse = _invert_rows(bindpose)
        bone.set_bindpose_inverse(rows_to_column_major(bindpose_inverse))
        return bone

    def tree_text(self) -> str:
        """Indented listing of the bone hierarchy, one bone per line."""
        lines = ["FbxSkeletons Tree Struct:\n"]
        root = self.root_bone()
        if root is None:
            lines.append("There is nothing")
        else:
            self._append_tree(root, 0, lines)
        return "".join(lines)

    def _append_tree(self, bone: Bone, indent: int, lines: list[str]) -> None:
        name = bone.name if bone.name is not None else "(null)"
        lines.append("    " * indent + name + "\n")
        for child in bone.children:
            self._append_tree(child, indent + 1, lines)