"""Framework-agnostic pipeline stages."""
