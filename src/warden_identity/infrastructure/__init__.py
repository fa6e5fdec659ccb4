"""Infrastructure adapters for identity management."""
