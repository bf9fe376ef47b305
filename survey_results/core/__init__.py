"""Core configuration and shared clients."""
