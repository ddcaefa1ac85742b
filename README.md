# meshcore

This package provides building blocks for a small 3D renderer, written in plain Python with no third-party dependencies.

## Modules

- `meshcore.vectors` has the `Vector2`, `Vector3` and `Vector4` dataclasses. They are mutable, their components default to `0.0`, and they can be iterated.
- `meshcore.enums` has three enums:
  - `AttributeBindingLocation`: `POSITION`, `COLOR`, `NORMAL`, `TEXTURE0`.
  - `MeshRenderType`: `TRIANGLES`, `LINES`.
  - `ShaderType`. Its `file_stem()` method returns the lower-case name. `shader_paths(base_dir)` returns the `.vsh` and `.fsh` paths under `base_dir`.
- `meshcore.better_list` has `BetterList`, a list whose indexing is bounds-checked. When the list is full, its capacity doubles, to at least 32. It has the methods `add`, `insert`, `remove`, `remove_at`, `pop`, `clear`, `release`, `capacity` and `to_list`. With `seek_to_end=True` the list starts filled to `capacity`, using the values made by `default`.
- `meshcore.file_reader` has `FileReader` and `read_text(path)`. Both read a whole file as text and raise `FileReadError` when the file is missing, cannot be read or cannot be decoded.
- `meshcore.tiny_memory` has `TinyMemory`, a pool allocator.
  - Each request is rounded up to one of 25 fixed size levels, the largest being 36 MB.
  - Addresses are integers in a private address space, aligned to 2, 4, 8, 16, 32 or 64.
  - `view(address, size)` gives a writable `memoryview` of an allocation.
  - `free` raises `MemoryError_` for a double free or an unknown address.
  - Other methods: `allocate_zero`, `cleanup`, `debug_dump`, `has_unreleased_memory`, `bytes_used`, `bytes_reserved_unused`, `level_for`.
- `meshcore.memory_log` has `MemoryLog`, `LogEntry` and `FileStatistics`. `MemoryLog` records allocation and release sites as file and line. `statistics()` groups them per file, and `format_report()` produces a text report that marks unbalanced files with `*`.
- `meshcore.tiny_heap` has `TinyHeap`, which sits on a `TinyMemory` with 4-byte alignment.
  - Passing `file`/`line` to `allocate`, `allocate_zero` or `free` records the site in the heap's `log`.
  - With `realtime_bytes_info` set, every allocation and free prints the byte counts to `stream` (stdout by default).
- `meshcore.memory` has `default_heap()`, which returns a shared `TinyHeap`. It also has `MemoryLeakDetector`, a context manager that writes a leak report when it exits. You can call `report()` to get the same text.
- `meshcore.skeleton` has `Bone`, `Skeleton`, `AnimationStack`, `SubMesh`, `identity_matrix()` and `rows_to_column_major(rows)`.
  - A `Skeleton` has exactly one root, added with `parent_index=-1`.
  - `bind_skin` sets a bone's indices, weights and bind pose. It computes the inverse bind pose when you do not give one.
  - `tree_text()` lists the hierarchy with indentation.
  - Matrices are stored as 16 column-major floats.
- `meshcore.mesh` has `Mesh`, `AttributePointer` and `DrawCall`.
  - `upload()` packs the attributes one after another: positions, then normals, then UVs, then colours. Components are little-endian float32. Indices go into a separate buffer as little-endian uint16.
  - `draw()` returns a `DrawCall` with the attribute pointers, the primitive, the index count and the buffers. The line width is included only for `LINES`.

## What this package does not do

- It does not talk to a graphics API. `Mesh.draw()` describes a draw call but does not issue it.
- It does not compile shaders. `ShaderType.shader_paths()` only builds file paths.
- It has no window, input handling or render loop.
- It does not load model files. You fill `Skeleton`, `Bone` and `SubMesh` from your own code.

## Installing

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Examples

Growing a list:

```python
from meshcore.better_list import BetterList

items = BetterList()
for i in range(33):
    items.add(i)
assert len(items) == 33
assert items.capacity() == 64
```

Building a line mesh for a set of axes:

```python
from meshcore.enums import MeshRenderType
from meshcore.mesh import Mesh
from meshcore.vectors import Vector3

mesh = Mesh(MeshRenderType.LINES)
mesh.set_vertices([Vector3(0, 0, 0), Vector3(100, 0, 0),
                   Vector3(0, 0, 0), Vector3(0, 100, 0),
                   Vector3(0, 0, 0), Vector3(0, 0, 100)])
mesh.set_colors([Vector3(1, 0, 0)] * 2 + [Vector3(0, 1, 0)] * 2 + [Vector3(0, 0, 1)] * 2)
mesh.set_indices([0, 1, 2, 3, 4, 5])
mesh.line_width = 2.0
mesh.upload()
call = mesh.draw()
assert call.count == 6
```

Building a skeleton:

```python
from meshcore.skeleton import Skeleton, identity_matrix

skeleton = Skeleton()
root = skeleton.add_bone("hips")
skeleton.add_bone("spine", root)
bone = skeleton.bind_skin("spine", [0, 1], [0.5, 0.5],
                          [[1, 0, 0, 0], [0, 1, 0, 0], [0, 0, 1, 0], [0, 2, 0, 1]])
print(skeleton.tree_text())
```

Watching a block of work for leaks:

```python
from meshcore.memory import MemoryLeakDetector

with MemoryLeakDetector(True, False, False) as detector:
    address = detector.heap.allocate(16, "example.py", 1)
    detector.heap.free(address, "example.py", 2)
```