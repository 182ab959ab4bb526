[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "racerep"
version = "0.1.0"
description = "Tag sim-racing drivers with behaviour flags and keep a local reputation database."
requires-python = ">=3.10"
dependencies = [
    "pillow",
]
keywords = [
    "sim-racing",
    "reputation",
    "drivers",
    "tagging",
    "sqlite",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Simulation",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["racerep"]

[tool.hatch.build.targets.sdist]
include = [
    "racerep",
    "tests",
]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
