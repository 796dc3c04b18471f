"""Shared helpers (media file discovery)."""
