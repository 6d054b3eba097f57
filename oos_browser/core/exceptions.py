class OosBrowserError(Exception):
    """Base exception for all oos_browser errors"""
    pass

class ConfigError(OosBrowserError):
    """Invalid or inconsistent global.json or dataset config"""
    pass

class DataLoadError(OosBrowserError):
    """
    A dataset file could not be read or parsed into records:
    missing file, unparseable dates, missing required columns, etc
    """
    pass

class ViewStateError(OosBrowserError):
    """A view was asked to update before its first full render"""
    pass
