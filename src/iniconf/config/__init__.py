"""Configuration of the iniconf tool itself: logging and CLI settings."""
