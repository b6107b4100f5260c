"""HTTP service that typesets LaTeX source into PDF."""

__version__ = "0.1.0"
