"""Error taxonomy shared by the todo store, backups, and config layers."""


class TickoffError(Exception):
    """Base class for all tickoff errors."""


class NotFoundError(TickoffError, LookupError):
    """A todo identifier or snapshot timestamp does not exist."""


class SourceMissingError(TickoffError):
    """There is no store file to back up."""


class StoreIOError(TickoffError):
    """Reading, writing, or decoding a store or snapshot file failed."""


class SnapshotExistsError(StoreIOError):
    """A snapshot with the same timestamp key is already on disk."""


class ConfigError(TickoffError):
    """Configuration file is unreadable or malformed."""
