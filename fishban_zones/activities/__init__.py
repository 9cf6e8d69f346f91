"""Pipeline stages.

Each stage is a pure function over in-memory data: parse coordinates,
classify geometry, segment by distance, sanitise polygons, and extract
zone rows from converted documents.
"""
