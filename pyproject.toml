[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pacman"
version = "1.0.0"
description = "A maze-chase arcade game with frightened ghosts, a persistent leaderboard and synthesized sound effects."
requires-python = ">=3.10"
keywords = ["game", "arcade", "maze", "pacman", "pygame"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: MacOS X",
    "Environment :: Win32 (MS Windows)",
    "Environment :: X11 Applications",
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
pacman = "pacman.app:main"

[tool.hatch.build.targets.wheel]
packages = ["pacman"]

[tool.hatch.build.targets.sdist]
include = ["pacman", "tests", "pyproject.toml", "README.md"]

[tool.pytest.ini_options]
addopts = "-ra"
