"""Database plumbing: engine creation, pool sizing, dialects and schema generation."""
