[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "duochat"
version = "0.1.0"
description = "A small two-way TCP chat that runs either as a client or as a broadcasting server"
requires-python = ">=3.10"
dependencies = []
keywords = ["chat", "tcp", "client", "server", "sockets"]
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
    "Topic :: Communications :: Chat",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
duochat = "duochat.app:main"

[tool.hatch.build.targets.wheel]
packages = ["duochat"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
