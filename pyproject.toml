[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "huffpack"
version = "0.1.0"
description = "Huffman compression of byte streams, with an optional password-scrambled header"
requires-python = ">=3.10"
dependencies = []
keywords = ["huffman", "compression", "prefix-code", "bitstream", "entropy-coding"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Archiving :: Compression",
]

[project.optional-dependencies]
test = ["pytest", "hypothesis"]

[project.scripts]
huffpack = "huffpack.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["huffpack"]

[tool.hatch.build.targets.sdist]
include = ["huffpack", "tests", "README.md", "pyproject.toml"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
