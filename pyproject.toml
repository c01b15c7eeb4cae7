[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tankbattle"
version = "3.0.0"
description = "A small top-down tank battle arcade game built on pygame"
requires-python = ">=3.10"
keywords = ["game", "arcade", "tank", "pygame"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Arcade",
]
dependencies = [
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
tankbattle = "tankbattle.game:main"

[tool.hatch.build.targets.wheel]
packages = ["tankbattle"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
