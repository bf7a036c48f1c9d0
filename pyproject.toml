[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tevremote"
version = "0.1.0"
description = "Remote control client for the tev image viewer over its TCP protocol"
requires-python = ">=3.10"
dependencies = []
keywords = ["tev", "image viewer", "remote control", "hdr", "pfm", "vector graphics"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: Viewers",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
tevremote-example = "tevremote.example:main"

[tool.hatch.build.targets.wheel]
packages = ["tevremote"]

[tool.pytest.ini_options]
addopts = "-ra"
