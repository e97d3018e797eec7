"""Module: langchat.config

Configuration package for the LangChat client.

This package organizes configuration into logical modules:
- app: Application info, logging
- network: Backend endpoint, reachability and retry timing
- ui: Bootstrap screen texts and colors

All settings are re-exported from this module:
    from langchat.config import APP_NAME, RETRY_MAX_INTERVAL
"""

from langchat.config.app import *  # noqa: F401, F403
from langchat.config.network import *  # noqa: F401, F403
from langchat.config.ui import *  # noqa: F401, F403
