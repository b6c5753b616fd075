"""Configuration, rendering and state analysis helpers."""
