"""Portfolio content and admin inbox service."""
