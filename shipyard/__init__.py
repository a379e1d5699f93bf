"""Configuration and game definitions for managing N64 PC port installs."""

__version__ = "0.1.0"