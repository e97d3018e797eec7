"""Module: langchat.config.app

Application-level configuration: app info, logging settings.
"""

# =====================================
# APPLICATION INFORMATION
# =====================================

APP_NAME = "langchat"
APP_VERSION = "1.0"

# Window
WINDOW_TITLE = "LangChat"
WINDOW_MIN_SIZE = (390, 700)

# =====================================
# LOGGING CONFIGURATION
# =====================================

# Console logging
LOG_TO_CONSOLE = True
LOG_CONSOLE_LEVEL = "INFO"

# File logging
LOG_TO_FILE = True
LOG_FILE_LEVEL = "INFO"
LOG_FILE_MAX_BYTES = 5_000_000  # 5MB per file
LOG_FILE_BACKUP_COUNT = 3

# Debug file logging
LOG_DEBUG_FILE_ENABLED = False
LOG_DEBUG_FILE_MAX_BYTES = 10_000_000
LOG_DEBUG_FILE_BACKUP_COUNT = 2

# Development logging settings
SHOW_DEV_ONLY_IN_CONSOLE = False
