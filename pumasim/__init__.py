"""Scene model of a six-axis PUMA robot arm: camera, meshes, kinematics, particles and input handling."""

__version__ = "0.1.0"