"""Snapshot assembly, redaction and emission."""
