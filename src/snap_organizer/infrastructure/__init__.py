"""Infrastructure layer: adapters between the engine and host projects."""
