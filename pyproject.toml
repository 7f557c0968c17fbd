[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "skribidi"
version = "0.1.0"
description = "Anti-aliased vector path rasterizer, emoji presentation scanner and debug drawing helpers"
requires-python = ">=3.10"
dependencies = []
keywords = ["rasterizer", "canvas", "gradient", "emoji", "vector", "drawing", "text"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Multimedia :: Graphics",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["skribidi"]

[tool.pytest.ini_options]
addopts = "-ra"
