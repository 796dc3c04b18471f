"""Photo geotagging from a curated location database.

Matches each photo's GPS coordinate against named GeoJSON points and
polygons, then writes standardised location tags (name, city, state,
country, identifiers) through ExifTool.
"""

__version__ = "0.1.0"
