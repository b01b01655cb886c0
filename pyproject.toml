[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "kvds"
version = "0.1.0"
description = "In-memory data structures for key-value stores: bitmaps, sharded dicts, sets, lists, key locks and sorted sets."
requires-python = ">=3.10"
dependencies = []
keywords = ["data structures", "skiplist", "sorted set", "bitmap", "quicklist", "key-value", "locks"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["kvds"]

[tool.pytest.ini_options]
addopts = "-ra"
