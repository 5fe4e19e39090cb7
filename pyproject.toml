[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "deathrelay"
version = "1.0.2"
description = "Watch a game's output log for player deaths and relay them as OSC avatar parameters"
requires-python = ">=3.10"
dependencies = []
keywords = ["osc", "log", "watcher", "vrchat", "avatar", "udp"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: Log Analysis",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
deathrelay = "deathrelay.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["deathrelay"]

[tool.pytest.ini_options]
addopts = "-ra"
