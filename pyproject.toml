[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "weightgroups"
version = "0.1.0"
description = "In-memory weighted membership groups and token-staking groups with height snapshots, hooks and unbonding claims"
requires-python = ">=3.10"
dependencies = []
keywords = ["membership", "voting weight", "staking", "groups", "snapshots", "hooks", "unbonding"]
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
    "Topic :: Office/Business :: Financial",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["weightgroups"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
