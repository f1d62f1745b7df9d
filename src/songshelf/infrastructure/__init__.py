"""Infrastructure layer: catalog adapters, logging, startup."""
