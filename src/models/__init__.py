"""Data models for the environment report."""
