[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "nullable"
version = "9.0.0"
description = "Nullable value types that tell apart unset, null and valid values, with JSON, text and database conversions."
requires-python = ">=3.10"
dependencies = []
keywords = ["null", "nullable", "optional", "json", "sql", "database", "scan"]
classifiers = [
    "Development Status :: 5 - Production/Stable",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Database",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["nullable"]

[tool.pytest.ini_options]
addopts = "-ra"
