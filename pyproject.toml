[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "srepinterp"
version = "0.1.0"
description = "Interpolation of elliptical skeletal representations (s-reps) to denser spoke grids"
requires-python = ">=3.10"
dependencies = []
keywords = ["s-rep", "skeletal representation", "interpolation", "medical imaging", "shape modeling"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Healthcare Industry",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Medical Science Apps.",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["srepinterp"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
