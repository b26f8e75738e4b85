"""Textual UI for imgzoom."""
