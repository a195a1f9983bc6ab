"""Application layer: validation pipeline and use-case services."""
