[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "quadkit"
version = "0.1.0"
description = "Layout cursor, input state, text editing and Tiled map loading for game UIs"
requires-python = ">=3.10"
dependencies = []
keywords = ["gamedev", "ui", "immediate-mode", "tiled", "tilemap", "text-editor"]
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
    "Topic :: Games/Entertainment",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["quadkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
