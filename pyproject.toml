[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sbhaco"
version = "0.1.0"
description = "DNA sequence reconstruction from k-mer spectra (sequencing by hybridization) with ant colony optimisation"
requires-python = ">=3.10"
dependencies = []
keywords = ["bioinformatics", "sequencing", "hybridization", "k-mer", "ant-colony", "levenshtein"]
classifiers = [
    "Development Status :: 3 - Alpha",
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

[project.scripts]
sbhaco = "sbhaco.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["sbhaco"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
