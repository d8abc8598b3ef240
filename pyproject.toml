[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "topogo"
version = "0.1.0"
description = "Go and a colour-flood strategy game played on boards of arbitrary topology: spheres, tori, Mobius strips, cubes and more"
requires-python = ">=3.10"
dependencies = []
keywords = ["go", "board game", "topology", "mobius", "torus", "flood fill", "game ai"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Board Games",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
topogo = "topogo.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["topogo"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
