[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "safelang"
version = "1.0.0"
description = "Lexer, syntax tree, checked memory model and standard runtime types for the SAFE? language"
requires-python = ">=3.10"
dependencies = []
keywords = ["compiler", "lexer", "syntax-tree", "memory-safety", "runtime"]
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
    "Topic :: Software Development :: Compilers",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["safelang"]

[tool.hatch.build.targets.sdist]
include = ["safelang", "tests", "README.md"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
