[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "flowgen"
version = "0.1.0"
description = "Game building blocks: 2D and tile geometry, circle collision helpers, weighted loot tables, procedural dungeon graphs and layout, and sprite animation timing."
requires-python = ">=3.10"
dependencies = []
keywords = ["gamedev", "procedural-generation", "dungeon", "loot-table", "collision", "animation"]
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
packages = ["flowgen"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
