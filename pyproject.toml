[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "brascollect"
version = "1.0.0"
description = "Record serializers, DCS file writers and frame classification for a BRAS traffic collector"
requires-python = ">=3.10"
dependencies = []
keywords = ["bras", "radius", "pppoe", "dcs", "traffic", "collector", "monitoring"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: System Administrators",
    "Intended Audience :: Telecommunications Industry",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking :: Monitoring",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["brascollect"]

[tool.pytest.ini_options]
addopts = "-ra"
