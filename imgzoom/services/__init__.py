"""Services for imgzoom: annotation syntaxes, sizing and the zoom engine."""
