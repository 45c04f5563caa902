"""API HTTP del detector de fallas."""
