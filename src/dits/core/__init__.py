"""Core utilities shared across the dits shim."""
