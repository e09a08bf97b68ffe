[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "arbfloat"
version = "0.1.11"
description = "Arbitrary-precision binary floating point numbers with configurable semantics and rounding modes"
requires-python = ">=3.10"
dependencies = []
keywords = ["float", "floating-point", "arbitrary-precision", "ieee754", "rounding"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Mathematics",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["arbfloat"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"
