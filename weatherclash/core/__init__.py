"""Core data, events, configuration and engine plumbing."""
