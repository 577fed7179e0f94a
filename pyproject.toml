[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "secretariat"
version = "0.1.0"
description = "A small in-memory student records store with an SQL-like query language and a block cipher for student data"
requires-python = ">=3.10"
dependencies = []
keywords = ["students", "records", "query", "database", "cipher"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Database :: Database Engines/Servers",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
secretariat = "secretariat.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["secretariat"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
