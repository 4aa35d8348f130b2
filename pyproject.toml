[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "astrokit"
version = "0.1.0"
description = "Rigid-body physics with box collisions, shader source preprocessing and texture format tables"
requires-python = ">=3.10"
dependencies = []
keywords = ["physics", "rigid body", "collision", "SAT", "quaternion", "shader", "glsl", "texture"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Physics",
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["astrokit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
