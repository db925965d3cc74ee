[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "findkit"
version = "0.1.0"
description = "Composable find-style file matchers and a parser for find expressions"
requires-python = ">=3.10"
dependencies = []
keywords = ["find", "filesystem", "glob", "matcher", "search"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Filesystems",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["findkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
