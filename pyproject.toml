[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "neurostruct"
version = "0.1.0"
description = "Neuron morphology data structures and readers for SWC, ASC, point/segment vectors and XML scenes"
requires-python = ">=3.10"
dependencies = []
keywords = ["neuroscience", "morphology", "swc", "neurolucida", "neuron", "column"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Bio-Informatics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["neurostruct"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
