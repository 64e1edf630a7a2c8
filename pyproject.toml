[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cellwidgets"
version = "0.1.0"
description = "Layout containers and widgets that draw onto an in-memory character-cell screen"
requires-python = ">=3.10"
dependencies = []
keywords = ["terminal", "tui", "widgets", "layout", "console", "character-cell"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Widget Sets",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["cellwidgets"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
