"""Configuration: settings file and environment."""
