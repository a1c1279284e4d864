[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cfselect"
version = "0.1.0"
description = "Correlation-based feature selection over ds2 matrix files"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = ["feature selection", "cfs", "correlation", "machine learning", "ds2"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Environment :: Console",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Information Analysis",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
cfselect = "cfselect.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["cfselect"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
