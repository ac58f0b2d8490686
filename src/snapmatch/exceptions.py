"""
Custom exceptions for snapmatch
"""


class SnapMatchError(Exception):
    """Base exception for all snapmatch errors"""
    pass


class ConfigError(SnapMatchError):
    """Configuration file could not be read or failed validation"""
    pass


class DataError(SnapMatchError):
    """Fixture data could not be loaded"""
    pass
