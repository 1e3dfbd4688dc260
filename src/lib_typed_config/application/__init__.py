"""Application layer: ports and key path resolution."""
