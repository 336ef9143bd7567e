"""shapesketch — freehand stroke classification (square / ellipse / line)."""

__version__ = "0.1.0"
