[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "stocknest"
version = "1.0.0"
description = "One-dimensional cutting-stock optimizer with an HTTP API for planning cuts from stock lengths"
requires-python = ">=3.10"
keywords = [
    "cutting stock",
    "nesting",
    "optimization",
    "integer programming",
    "lumber",
    "woodworking",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Web Environment",
    "Framework :: Flask",
    "Intended Audience :: End Users/Desktop",
    "Intended Audience :: Manufacturing",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business",
]
dependencies = [
    "numpy",
    "scipy",
    "flask",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
stocknest-server = "stocknest.server:main"

[tool.hatch.build.targets.wheel]
packages = ["stocknest"]

[tool.pytest.ini_options]
addopts = "-ra"
