"""Playwright module (shared browser pool + page helpers)."""

from .browser import BrowserPool, build_launch_args, is_missing_browser_error
from .pages import configure_page, dismiss_consent, settle

__all__ = [
    "BrowserPool",
    "build_launch_args",
    "is_missing_browser_error",
    "configure_page",
    "dismiss_consent",
    "settle",
]
