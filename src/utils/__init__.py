"""Utility helpers for the environment report."""
