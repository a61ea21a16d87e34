"""Custom Exceptions for the LyricSync application."""

class LyricSyncError(Exception):
    """Base class for exceptions in this module."""
    pass

class ConfigurationError(LyricSyncError):
    """Exception raised for errors in configuration loading or validation."""
    pass

class FileLoadError(LyricSyncError):
    """Exception raised when a lyrics or text file cannot be read or decoded."""
    pass

class FormattingError(LyricSyncError):
    """Exception raised for errors while writing timeline previews."""
    pass

class DisplaySinkError(LyricSyncError):
    """Exception raised by display sinks that fail to deliver a payload."""
    pass

class FileSystemError(LyricSyncError):
    """Exception raised for file system related errors (permissions, not found etc)."""
    pass
