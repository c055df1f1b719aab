[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "bwclient"
version = "2.0.0"
description = "Terminal client for a Bouncy World simulation server"
requires-python = ">=3.10"
dependencies = []
keywords = ["bounce", "simulation", "client", "terminal", "tcp"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Simulation",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
bwclient = "bwclient.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["bwclient"]

[tool.pytest.ini_options]
addopts = "-ra"
