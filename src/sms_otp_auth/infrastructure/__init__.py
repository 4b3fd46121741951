"""Infrastructure layer: ports and adapters."""
