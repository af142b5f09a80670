[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "chcolumns"
version = "0.1.0"
description = "In-memory storage and native-format encoding for ClickHouse column types"
requires-python = ">=3.10"
dependencies = []
keywords = ["clickhouse", "columnar", "database", "native-format", "serialization"]
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
    "Topic :: Database :: Front-Ends",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["chcolumns"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
