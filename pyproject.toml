[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cpackget"
version = "0.1.0"
description = "Utilities for CMSIS software packs: pack names and versions, PDSC and PIDX files, guarded downloads and archive extraction."
requires-python = ">=3.10"
keywords = ["cmsis", "pack", "pdsc", "pidx", "embedded", "semver"]
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
    "Topic :: Software Development :: Embedded Systems",
]
dependencies = [
    "tqdm",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["cpackget"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
