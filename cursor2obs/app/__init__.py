"""Process bootstrap and runtime wiring."""
