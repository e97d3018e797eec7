"""Module: langchat.config.ui

Bootstrap screen texts and colors.
"""

# =====================================
# OFFLINE SCREEN
# =====================================

OFFLINE_TITLE = "You're offline"
OFFLINE_MESSAGE = "We can't reach LangChat right now. We'll keep trying."
OFFLINE_RETRYING = "Retrying"
OFFLINE_STILL_OFFLINE = "Still offline"
OFFLINE_CHECKING = "Checking connection..."
OFFLINE_NEXT_RETRY = "Next retry in {seconds}s"
OFFLINE_RETRY_BUTTON = "Try again"

# =====================================
# OTHER ROOT SCREENS
# =====================================

LOADING_TEXT = "Loading..."
ROOT_PLACEHOLDER_TEXTS = {
    "mainApp": "Discover",
    "onboarding": "Let's set up your profile",
    "authentication": "Sign in to LangChat",
}

# =====================================
# COLORS
# =====================================

ROOT_BACKGROUND = "#1a1a1a"
OFFLINE_BACKGROUND = "#1a1a26"
PRIMARY_TEXT = "#ffffff"
SECONDARY_TEXT = "#b3b3b3"
ACCENT_COLOR = "#0a84ff"
BANNER_OFFLINE_COLOR = "#ff453a"
BANNER_ONLINE_COLOR = "#30d158"
