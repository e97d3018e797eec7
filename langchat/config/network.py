"""Module: langchat.config.network

Backend endpoint and connectivity timing.

Credentials come from the environment. A ``.env`` file in the working
directory is honoured when present.
"""

import os

from dotenv import load_dotenv

load_dotenv()

# =====================================
# BACKEND
# =====================================

SUPABASE_URL = os.environ.get("SUPABASE_URL", "").rstrip("/")
SUPABASE_ANON_KEY = os.environ.get("SUPABASE_ANON_KEY", "")

# Optional persisted session handed over by the auth flow
SUPABASE_ACCESS_TOKEN = os.environ.get("SUPABASE_ACCESS_TOKEN", "")
SUPABASE_USER_ID = os.environ.get("SUPABASE_USER_ID", "")

# =====================================
# REACHABILITY
# =====================================

REACHABILITY_TIMEOUT_SECONDS = 10.0
PROFILE_REQUEST_TIMEOUT_SECONDS = 10.0

# Passive network path polling
PATH_POLL_INTERVAL = 2.0

# =====================================
# OFFLINE RETRY
# =====================================

RETRY_INITIAL_INTERVAL = 3.0
RETRY_MAX_INTERVAL = 30.0
RETRY_BACKOFF_MULTIPLIER = 1.5

# Offline banner "back online" indicator
BANNER_AUTO_HIDE_SECONDS = 2.0
