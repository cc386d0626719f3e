[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "causeway"
version = "0.1.0"
description = "Error chains with context, cause iteration, backtraces and descriptive condition checks"
requires-python = ">=3.10"
dependencies = []
keywords = ["errors", "exceptions", "context", "error-chain", "ensure", "backtrace"]
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
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["causeway"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
