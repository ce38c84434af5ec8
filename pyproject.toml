[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "hayride"
version = "0.0.1"
description = "Morph registry lookup, package resolution, logging setup and chat prompt models for Hayride"
requires-python = ">=3.11"
keywords = ["wasm", "components", "registry", "morphs", "prompt", "chat"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries",
]
dependencies = [
    "semver",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["hayride"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
