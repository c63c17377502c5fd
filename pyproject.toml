[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "goapkit"
version = "0.1.0"
description = "Goal-oriented action planning: bit-packed world states, regressive A* planning, goals, agents and ability cooldown groups."
requires-python = ">=3.10"
dependencies = []
keywords = ["goap", "planning", "a-star", "ai", "game-ai", "agents"]
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
    "Topic :: Scientific/Engineering :: Artificial Intelligence",
    "Topic :: Games/Entertainment :: Simulation",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["goapkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
