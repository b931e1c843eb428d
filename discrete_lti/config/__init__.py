"""
Runtime settings and model definition files.

The file loader lives in discrete_lti.config.loader; it is not imported here
because it depends on the model classes, which themselves read the settings.
"""

from .settings import Settings, get_settings, set_settings

__all__ = ["Settings", "get_settings", "set_settings"]
