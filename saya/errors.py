"""Exceptions raised by Saya."""


class SayaError(Exception):
    """Base class for all Saya errors."""
    pass


class DictionaryLoadError(SayaError):
    """Raised when a dictionary file cannot be found, read or decoded."""
    pass


class DictionaryParseError(DictionaryLoadError):
    """Raised when dictionary data does not have the expected structure."""
    pass


class ConfigError(SayaError):
    """Raised when a configuration file cannot be read or validated."""
    pass


class AnalysisTimeoutError(SayaError):
    """Raised when async analysis times out."""
    pass
