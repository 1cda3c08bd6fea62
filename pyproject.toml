[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sgraph"
version = "0.1.0"
description = "Scene graph core: components, scene hierarchy, page allocators, 2D/3D math types, colours, MurmurHash3 and QOI decoding"
requires-python = ">=3.10"
dependencies = []
keywords = ["scene graph", "components", "allocator", "math", "murmurhash", "qoi"]
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
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["sgraph"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
