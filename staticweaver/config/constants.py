"""
Constants and configuration defaults for StaticWeaver.

Centralized location for magic numbers and configuration constants.
"""

from datetime import timedelta

# ============================================================================
# Template Syntax
# ============================================================================

DEFAULT_OPEN_DELIM = "{{"
DEFAULT_CLOSE_DELIM = "}}"
TEMPLATE_EXTENSION = ".html"

# ============================================================================
# Cache Configuration
# ============================================================================

DEFAULT_CACHE_TTL = timedelta(seconds=60)

# ============================================================================
# Template Download
# ============================================================================

DEFAULT_TEMPLATE_URL = (
    "https://raw.githubusercontent.com/sebastienrousseau/shokunin/main/template/"
)

# Files making up a template bundle
TEMPLATE_BUNDLE_FILES = [
    "contact.html",
    "index.html",
    "page.html",
    "post.html",
    "main.js",
    "sw.js",
]

DOWNLOAD_TIMEOUT = 10  # seconds, single attempt

# ============================================================================
# File System Configuration
# ============================================================================

DEFAULT_TEMPLATE_DIR = "templates"
DEFAULT_CONFIG_DIR = "configs"
DEFAULT_LOG_DIR = "logs"
DEFAULT_LOG_FILE = "logs/staticweaver.log"

# ============================================================================
# Validation Rules
# ============================================================================

# Valid log levels
VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
