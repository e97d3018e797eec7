"""LangChat client bootstrap.

Connectivity-gated startup for the LangChat client: network monitoring,
session check, profile sync and root screen selection, with
exponential-backoff retry while the backend is unreachable.
"""

from langchat.config.app import APP_VERSION

__version__ = APP_VERSION
