"""Core utilities and shared infrastructure.

- config: Parser configuration loading and validation
- constants: Coordinate bounds and pipeline defaults
- exceptions: Custom exception hierarchy
"""
