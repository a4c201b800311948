[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "fernc"
version = "0.1.0"
description = "Compiler front end for the Fern programming language: source map, lexer, parser, diagnostics and a formatter."
requires-python = ">=3.10"
dependencies = []
keywords = ["compiler", "lexer", "parser", "diagnostics", "fern"]
classifiers = [
    "Development Status :: 2 - Pre-Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Compilers",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
fernc = "fernc.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["fernc"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
