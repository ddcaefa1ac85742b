[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "meshcore"
version = "0.1.0"
description = "Mesh buffer layout, skeletons, and a pooled allocator with leak reporting for 3D rendering"
requires-python = ">=3.10"
dependencies = []
keywords = ["mesh", "skeleton", "bone", "vertex buffer", "allocator", "memory pool", "3d"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: 3D Rendering",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["meshcore"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
