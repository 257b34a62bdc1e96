[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ionbinary"
version = "0.1.0"
description = "Low-level building blocks for reading and writing the binary Ion data format"
requires-python = ">=3.10"
keywords = ["ion", "binary", "serialization", "decimal", "varint"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: File Formats",
    "Topic :: Software Development :: Libraries :: Python Modules",
]
dependencies = []

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["ionbinary"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
