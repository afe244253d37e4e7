"""Git graph visualization components."""
