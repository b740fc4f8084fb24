"""Elliptical s-rep geometry and its interpolation to denser spoke grids."""

__version__ = "0.1.0"
__all__ = ["geometry", "grid", "interpolation"]