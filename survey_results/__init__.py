"""Survey results service."""
