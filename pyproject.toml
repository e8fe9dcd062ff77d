[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pumasim"
version = "0.1.0"
description = "Scene model of a six-axis PUMA robot arm: inverse kinematics, camera, meshes with shadow-volume adjacency, particles and input handling"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = ["robotics", "puma", "inverse-kinematics", "camera", "mesh", "particles", "3d"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Multimedia :: Graphics :: 3D Rendering",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["pumasim"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
ignore_missing_imports = true
