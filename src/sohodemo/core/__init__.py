"""Path resolution, content lookup and rendering."""
