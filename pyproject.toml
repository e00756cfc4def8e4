[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "simonsays"
version = "0.1.0"
description = "A Simon memory game engine running on simulated LEDs, buttons, buzzer and display"
requires-python = ">=3.10"
dependencies = []
keywords = ["simon", "memory game", "game", "state machine", "neopixel", "simulation"]
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
    "Topic :: Games/Entertainment :: Puzzle Games",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
simonsays = "simonsays.app:main"

[tool.hatch.build.targets.wheel]
packages = ["simonsays"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
