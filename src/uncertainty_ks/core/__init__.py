"""Domain core: models, error taxonomy, interfaces and orchestration services."""
