[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "argonrt"
version = "3.0.0"
description = "Runtime value model, operators and built-in library for the Argon scripting language"
requires-python = ">=3.10"
dependencies = []
keywords = ["argon", "interpreter", "runtime", "scripting", "rational numbers"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Interpreters",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["argonrt"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
