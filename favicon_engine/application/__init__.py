"""Application layer: services orchestrating discovery, synthesis and caching."""
