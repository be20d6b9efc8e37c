"""Portfolio site: reactive content state kernel, renderer and build CLI."""

__version__ = "0.1.0"
