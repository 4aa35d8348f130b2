"""Vector maths, events, rigid-body physics, shader preprocessing and texture format tables."""

__version__ = "0.1.0"

__all__ = ["vecmath", "events", "body", "system", "shader", "textures"]