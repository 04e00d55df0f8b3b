"""Decision Master: weighted decision matrix service."""
