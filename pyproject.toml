[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "keyedlock"
version = "0.2.3"
description = "A keyed lock: mutual exclusion per key, for threads and asyncio tasks."
requires-python = ">=3.10"
dependencies = []
keywords = ["lock", "mutex", "keyed-lock", "named-lock", "async", "asyncio", "threading"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Framework :: AsyncIO",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest", "pytest-asyncio"]

[tool.hatch.build.targets.wheel]
packages = ["keyedlock"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
