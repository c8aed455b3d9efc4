[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "xunschema"
version = "0.1.0"
description = "Table blueprints and a schema builder for describing and altering relational database tables"
requires-python = ">=3.10"
dependencies = []
keywords = ["database", "schema", "migration", "blueprint", "ddl"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Database :: Front-Ends",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["xunschema"]

[tool.pytest.ini_options]
addopts = "-ra"
