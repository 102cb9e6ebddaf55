"""Exceptions raised by neardupe.

Ordinary malformed input never raises: the entry points return an empty list
instead. Only resource lifecycle problems surface as exceptions.
"""


class NearDupeError(Exception):
    """Base class for neardupe errors."""


class ResourceLoadError(NearDupeError):
    """Linguistic resources are missing or corrupt. Fatal at startup."""


class ResourcesReleasedError(NearDupeError):
    """A call was made after shutdown() released the linguistic resources."""


__all__ = [
    "NearDupeError",
    "ResourceLoadError",
    "ResourcesReleasedError",
]
