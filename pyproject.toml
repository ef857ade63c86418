[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rimviz"
version = "0.1.0"
description = "Interactive mathematical visualization: coordinate axes, grids and circles with zoom, a performance overlay and screenshots"
requires-python = ">=3.10"
keywords = ["mathematics", "visualization", "axes", "grid", "plotting", "pygame"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Education",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Visualization",
    "Topic :: Scientific/Engineering :: Mathematics",
]
dependencies = [
    "pygame",
    "psutil",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
rimviz = "rimviz.app:main"

[tool.hatch.build.targets.wheel]
packages = ["rimviz"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
