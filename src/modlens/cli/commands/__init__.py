"""CLI commands for modlens."""
