[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "flightsim"
version = "0.1.0"
description = "Flight simulation core: aircraft dynamics, cameras, HUD geometry, procedural terrain, flame particles and cloud lighting math"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = ["flight", "simulator", "terrain", "hud", "particles", "camera", "noise"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Games/Entertainment :: Simulation",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["flightsim"]

[tool.pytest.ini_options]
addopts = "-ra"
