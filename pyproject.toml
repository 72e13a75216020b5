[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "zaplite"
version = "0.1.0"
description = "Structured logging cores, tees, write syncers, an in-memory observer and line and gRPC-style logging adapters."
requires-python = ">=3.11"
dependencies = []
keywords = ["logging", "structured-logging", "observer", "tee", "testing"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Logging",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["zaplite"]

[tool.pytest.ini_options]
addopts = "-ra"
