"""Data models for the pay API."""
