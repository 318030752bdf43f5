"""AVFRD training compliance and position qualification tools."""
