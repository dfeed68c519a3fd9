"""Storage backends for emitted nodes."""
