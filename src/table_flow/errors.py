"""Exception types raised while measuring, laying out and drawing tables."""


class TableFlowError(Exception):
    """Base class for all table layout errors."""


class MeasurementError(TableFlowError):
    """A font could not be resolved or a string could not be measured."""


class BackendError(TableFlowError):
    """The document backend rejected a drawing or page operation."""


class ConfigError(TableFlowError):
    """A configuration file or table definition is malformed."""
