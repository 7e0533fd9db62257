"""Configuration module for the Call Center Dashboard"""

from .settings import Settings, Environment, settings

__all__ = ["Settings", "Environment", "settings"]
