"""Follow a game's output log and relay player deaths as OSC avatar parameters."""

__version__ = "1.0.2"
__all__ = ["__version__"]