[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cctx"
version = "0.1.4"
description = "Switch Claude Code between multiple saved settings.json configurations"
requires-python = ">=3.10"
dependencies = []
keywords = ["claude", "claude-code", "context", "cli", "config", "settings"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
cctx = "cctx.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["cctx"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
