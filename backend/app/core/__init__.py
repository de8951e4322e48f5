"""Configuration and security primitives."""
