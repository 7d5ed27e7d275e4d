"""Data models for BBView TUI."""
