"""Geotagging activities.

Each activity performs a single unit of work in the per-file pipeline:
- load_locations: Parse GeoJSON into the in-memory location database
- geometry: Haversine distance, ray-casting containment, centroid, area
- resolve_location: Pick the best record and tier for a GPS coordinate
- build_tags: Map a match to the ExifTool fields to write
"""
