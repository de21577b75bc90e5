"""GitHub Battle backend."""
