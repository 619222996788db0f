[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sequencer"
version = "0.1.0"
description = "In-memory registry of rollapp sequencers: records, keyed store, queries, message handling and genesis import/export"
requires-python = ">=3.10"
dependencies = []
keywords = ["sequencer", "rollapp", "keeper", "genesis", "bech32"]
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
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["sequencer"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
