"""Date arithmetic and numerical helpers."""
