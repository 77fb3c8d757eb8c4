import os
from dotenv import load_dotenv
from pathlib import Path

# load .env at startup from project root
# Path(__file__) is network_manager/core/config.py, so we go up 2 levels to reach project root
project_root = Path(__file__).parent.parent.parent
load_dotenv(dotenv_path=project_root / ".env")

# Transport configuration
NETWORK_TIMEOUT = float(os.getenv("NETWORK_TIMEOUT", "30"))
NETWORK_CONNECT_TIMEOUT = float(os.getenv("NETWORK_CONNECT_TIMEOUT", "10"))
NETWORK_USER_AGENT = os.getenv("NETWORK_USER_AGENT", "network-manager/1.0")
NETWORK_FOLLOW_REDIRECTS = os.getenv("NETWORK_FOLLOW_REDIRECTS", "true").lower() in ("1", "true", "yes")
NETWORK_MAX_REDIRECTS = int(os.getenv("NETWORK_MAX_REDIRECTS", "5"))

# Connection pool
NETWORK_MAX_CONNECTIONS = int(os.getenv("NETWORK_MAX_CONNECTIONS", "20"))
NETWORK_MAX_KEEPALIVE_CONNECTIONS = int(os.getenv("NETWORK_MAX_KEEPALIVE_CONNECTIONS", "10"))

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
