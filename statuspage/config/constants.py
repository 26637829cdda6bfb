"""Constants for the configuration module."""

# Log component names
COMPONENT_CONFIG = "config"
COMPONENT_CLI = "cli"
COMPONENT_SERVER = "server"

# Supported URL schemes
VALID_URL_SCHEMES = ("http://", "https://")

# Pseudo-location for settings read from the environment
ENVIRONMENT_LOCATION = "environment"
