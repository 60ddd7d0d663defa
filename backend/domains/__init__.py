"""Domain and infrastructure layer."""
