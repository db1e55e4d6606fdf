"""
formrules Core
==============

Process-wide configuration.
"""

from formrules.core.config import Config, config, get_config, reset_config

__all__ = ["Config", "config", "get_config", "reset_config"]
