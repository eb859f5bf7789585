[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ddnnkit"
version = "0.1.0"
description = "Counting, satisfiability, sampling and t-wise sampling on d-DNNF formulas"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = ["d-DNNF", "knowledge compilation", "model counting", "sampling", "feature models", "t-wise"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["ddnnkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
