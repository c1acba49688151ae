"""Infrastructure: cache backends, persistence, and security."""
