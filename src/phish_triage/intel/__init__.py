"""Header authentication and IOC extraction."""
