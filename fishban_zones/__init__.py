"""Fishing-ban zone geometry pipeline.

Turns Russian-language fishing-restriction documents (table cells and
free text carrying degree-minute-second coordinate lists) into
Point / LineString / Polygon features ready to be served as GeoJSON.
"""

__version__ = "0.1.0"
