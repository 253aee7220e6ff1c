[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mcuasync"
version = "0.2.0"
description = "Cooperative poll-loop scheduler, promises, coroutines, a line-editing command console and small containers"
requires-python = ">=3.10"
keywords = ["scheduler", "cooperative", "poll", "promise", "coroutine", "console", "ring-buffer", "printf"]
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
    "Topic :: Software Development :: Libraries :: Application Frameworks",
    "Topic :: Software Development :: Embedded Systems",
]
dependencies = [
    "sortedcontainers",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["mcuasync"]

[tool.pytest.ini_options]
addopts = "-ra"
