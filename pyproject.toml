[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "restodesk"
version = "0.1.0"
description = "Restaurant back office storage over SQLite: tables, menu, staff, bills, bill rules and paged list navigation."
requires-python = ">=3.10"
dependencies = []
keywords = ["restaurant", "point-of-sale", "billing", "sqlite", "menu"]
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
    "Topic :: Office/Business :: Financial :: Point-Of-Sale",
    "Topic :: Database",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["restodesk"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
