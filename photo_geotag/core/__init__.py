"""Core utilities and shared infrastructure.

- config: Configuration loading and validation
- constants: Matching thresholds, GeoJSON property names, ExifTool tags
- exceptions: Custom exception hierarchy
"""
