[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "chickadee"
version = "0.1.0"
description = "Teaching-kernel support library: bit arithmetic, memory range sets, intrusive lists, printf, a CGA console model, and on-disk file system and ELF structures"
requires-python = ">=3.10"
keywords = ["kernel", "printf", "elf", "filesystem", "bitset", "console", "linked-list"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Libraries",
]
dependencies = []

[project.optional-dependencies]
test = [
    "pytest",
    "hypothesis",
]

[tool.hatch.build.targets.wheel]
packages = ["chickadee"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"
