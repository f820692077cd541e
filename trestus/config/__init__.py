"""Static configuration values shared across modules."""
