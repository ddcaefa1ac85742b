"""Vectors, mesh buffer layout, skeletons and a pooled allocator with leak reporting."""

__version__ = "0.1.0"

__all__ = [
    "better_list",
    "enums",
    "file_reader",
    "memory",
    "memory_log",
    "mesh",
    "skeleton",
    "tiny_heap",
    "tiny_memory",
    "vectors",
]