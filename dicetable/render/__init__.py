"""Surface renderers for dice boards."""
