"""Report rendering, export and charts."""
