[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tabledb"
version = "0.1.0"
description = "A small file-backed table store with a SQL-like shell, plus thread synchronisation programs"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "database",
    "csv",
    "sql",
    "threading",
    "synchronization",
    "dining-philosophers",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
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
tabledb = "tabledb.parser:main"
tabledb-primitives = "tabledb.primitives:main"
tabledb-philosophers = "tabledb.philosophers:main"
tabledb-students = "tabledb.students:main"
tabledb-client = "tabledb.client:main"

[tool.hatch.build.targets.wheel]
packages = ["tabledb"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
