"""Core infrastructure: configuration, logging, errors, storage and security."""
