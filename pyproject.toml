[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "seriestools"
version = "0.1.0"
description = "LOESS smoothing and Box-Cox transforms for numeric series"
requires-python = ">=3.10"
dependencies = []
keywords = ["loess", "smoothing", "box-cox", "time series", "statistics"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Information Analysis",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["seriestools"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
