"""Currency configuration: registry loaders and the environment-driven default registry."""
