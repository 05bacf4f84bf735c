[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "bez"
version = "0.1.0"
description = "A small pixel-perfect editor for bezier rotoscoping masks and node graphs"
requires-python = ">=3.10"
keywords = ["bezier", "rotoscoping", "node-graph", "pixel", "rasterizer", "vector-graphics"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: X11 Applications",
    "Intended Audience :: End Users/Desktop",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: Editors :: Vector-Based",
]
dependencies = [
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
bez = "bez.app:main"

[tool.hatch.build.targets.wheel]
packages = ["bez"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
