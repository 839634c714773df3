"""Infrastructure layer: store adapters, stubs and observability."""
