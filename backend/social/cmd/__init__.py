"""Process entry points (console scripts)."""
