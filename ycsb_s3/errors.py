"""
Exception types raised inside the adapter package.

None of these cross the adapter boundary: object operations turn them into
result kinds and the adapter turns those into status codes.
"""


class S3AdapterError(Exception):
    """Base class for adapter errors"""


class ConfigError(S3AdapterError, ValueError):
    """A configuration value could not be parsed"""


class InvalidRecordError(S3AdapterError, ValueError):
    """A record cannot be encoded into a payload"""


class ShortReadError(S3AdapterError):
    """An object stream ended before its declared content length"""

    def __init__(self, expected: int, actual: int):
        super().__init__(f"expected {expected} bytes, got {actual}")
        self.expected = expected
        self.actual = actual
