"""Core fork registry components."""
