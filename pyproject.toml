[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "chaindex"
version = "0.1.0"
description = "Storage layer for indexed blockchain staking data, with building blocks for account and delegation queries"
requires-python = ">=3.10"
dependencies = [
    "pyyaml",
]
keywords = ["blockchain", "indexer", "staking", "validators", "sqlite"]
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
    "Topic :: Database",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["chaindex"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
