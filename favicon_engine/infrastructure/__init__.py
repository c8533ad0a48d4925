"""Infrastructure: caches, filesystem access and registry adapters."""
