# supersearch/domain/errors.py


class SupersearchError(Exception):
    """Base class for every failure raised by supersearch adapters."""


class ContentSourceUnavailable(SupersearchError):
    """The content store could not be read; the snapshot must stay as it is."""


class SnapshotUnavailable(SupersearchError):
    """The index snapshot could not be fetched or decoded."""


class SnapshotWriteError(SupersearchError):
    """The index snapshot could not be written."""
