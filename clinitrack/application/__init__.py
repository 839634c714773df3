"""Application layer: ports and orchestration services."""
