"""HTTP-facing services."""
