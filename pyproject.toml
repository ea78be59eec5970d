[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "truerpg"
version = "0.1.0"
description = "A small top-down role-playing game built on an entity-component-system scene"
requires-python = ">=3.10"
keywords = ["game", "rpg", "ecs", "pygame", "simplex-noise", "procedural"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Role-Playing",
]
dependencies = [
    "pygame",
    "numpy",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
truerpg = "truerpg.game:main"

[tool.hatch.build.targets.wheel]
packages = ["truerpg"]

[tool.pytest.ini_options]
addopts = "-ra"
