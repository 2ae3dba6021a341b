"""Defaults, persisted settings schema and store."""
