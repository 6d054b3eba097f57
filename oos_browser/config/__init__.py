"""
Configuration layer: JSON config models and the dataset loading entrypoint.

Import from the submodules directly:
    oos_browser.config.model
    oos_browser.config.loader
"""
