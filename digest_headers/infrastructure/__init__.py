"""Infrastructure layer: framework adapters and observability."""
