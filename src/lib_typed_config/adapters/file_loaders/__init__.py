"""Structured file loaders (YAML, JSON, TOML)."""
