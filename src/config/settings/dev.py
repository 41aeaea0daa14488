"""Development settings."""
from .base import *  # noqa: F401,F403

DEBUG = True

# Debug toolbar
try:
    import debug_toolbar  # noqa: F401
    INSTALLED_APPS += ["debug_toolbar"]  # noqa: F405
    MIDDLEWARE.insert(0, "debug_toolbar.middleware.DebugToolbarMiddleware")  # noqa: F405
    INTERNAL_IPS = ["127.0.0.1"]
except ImportError:
    pass

# Logging
LOGGING["root"]["level"] = "DEBUG"  # noqa: F405
