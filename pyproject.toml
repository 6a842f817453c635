[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ddstex"
version = "0.1.0"
description = "Parse and validate DDS texture files and lay out their mip levels and array slices"
requires-python = ">=3.10"
dependencies = []
keywords = ["dds", "texture", "dxgi", "mipmap", "directdraw surface", "graphics"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: Graphics Conversion",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["ddstex"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
