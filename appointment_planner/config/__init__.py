"""Configuration loading (YAML + JSON Schema, .env overrides)."""
