"""Configuration and logging setup from the environment."""
