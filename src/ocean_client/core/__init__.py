"""Core types and exceptions shared across the ocean client."""
