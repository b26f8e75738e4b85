"""Data models for imgzoom."""
