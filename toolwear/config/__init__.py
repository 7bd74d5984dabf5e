"""Fixed configuration for the tool wear engine."""
