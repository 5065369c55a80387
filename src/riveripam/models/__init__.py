"""Data models for node addressing and host routes."""
