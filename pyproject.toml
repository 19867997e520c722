[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "accessmodel"
version = "0.1.0"
description = "Access control models: model configuration, policy storage and effect merging"
requires-python = ">=3.10"
dependencies = []
keywords = ["access-control", "authorization", "acl", "rbac", "abac", "policy"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Security",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["accessmodel"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
