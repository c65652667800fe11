"""Application layer: body digest and request guard services."""
