[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "hmcapi"
version = "0.1.0"
description = "Resource types, status conditions, validation rules and field indexers for managed clusters, templates and releases"
requires-python = ">=3.10"
dependencies = [
    "pyyaml",
]
keywords = ["kubernetes", "cluster-api", "helm", "templates", "management"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Clustering",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["hmcapi"]

[tool.pytest.ini_options]
addopts = "-ra"
