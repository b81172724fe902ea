"""Exceptions raised at the construction and parsing boundaries of mechnet.

The analysis entry points never raise for degenerate input; these are only
raised while building a GraphModel or loading configuration.
"""


class MechnetError(Exception):
    """Base class for all mechnet errors."""


class DatasetError(MechnetError, ValueError):
    """Raised when a dataset record is malformed or violates an invariant."""


class ConfigError(MechnetError, ValueError):
    """Raised when a layout configuration is invalid."""
