"""R&D tax credit calculation engine."""

__version__ = "0.1.0"
