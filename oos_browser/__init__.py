"""
Top-level package for the out-of-school browser.

This package exposes the core architecture (datasets, selection broadcasting,
views, UI adapters). Most code should import from submodules such as:
    oos_browser.core
    oos_browser.views
    oos_browser.ui
"""

__all__: list[str] = []
