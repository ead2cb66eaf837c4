"""Core infrastructure: paths, settings and theme."""
