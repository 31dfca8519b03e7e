"""Core placement engine modules."""
