[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "graphgate"
version = "0.1.0"
description = "Building blocks for a GraphQL gateway: accumulating validation, mustache templates, request templates and resolver expressions"
requires-python = ">=3.10"
dependencies = []
keywords = ["graphql", "gateway", "mustache", "validation", "http", "cache-control"]
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
    "Topic :: Internet :: WWW/HTTP",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest", "pytest-asyncio"]

[tool.hatch.build.targets.wheel]
packages = ["graphgate"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
