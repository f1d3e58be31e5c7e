"""Glyphmesh - Extrude SVG path outlines into solid meshes.

Glyphmesh reads the <path> elements of an SVG document, cleans up their
flattened contours, triangulates each path and extrudes it between z=0 and
z=1 into a closed, consistently wound OBJ mesh.

Example:
    $ glyphmesh logo.svg

This will create logo.obj next to the input file.
"""

__version__ = "0.1.0"
__author__ = "Dimosthenis Kaponis"

__all__ = ["__author__", "__version__"]
