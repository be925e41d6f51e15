[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "lsdjkit"
version = "0.1.0"
description = "Little Sound Dj song data: block compression, instrument parameters and project names"
requires-python = ">=3.10"
dependencies = []
keywords = ["lsdj", "chiptune", "gameboy", "tracker", "music", "compression", "instrument"]
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
    "Topic :: Multimedia :: Sound/Audio",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["lsdjkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
