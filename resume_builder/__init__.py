"""Resume builder: canonical resume document, edit engine, and renderers."""

__version__ = "0.1.0"
