"""Exceptions raised by the messages core."""


class MessagesCoreError(Exception):
    """Base class for errors raised by the messages core."""


class StorageError(MessagesCoreError):
    """The configuration store could not be read or written."""
