[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "schoollib"
version = "0.1.0"
description = "School library workstation: a pupil register and reading logs kept in a SQLite database"
requires-python = ">=3.10"
dependencies = []
keywords = ["library", "school", "reading log", "sqlite", "education"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Natural Language :: Russian",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Education",
    "Topic :: Database :: Front-Ends",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
schoollib = "schoollib.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["schoollib"]

[tool.pytest.ini_options]
addopts = "-ra"
