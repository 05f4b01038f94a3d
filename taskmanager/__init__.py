"""Task manager: cookie-session REST API for personal task lists."""

__version__ = "0.1.0"
