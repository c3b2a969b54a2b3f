"""Exceptions raised by the OpenGL registry model.

Only usage errors and malformed input raise. Incomplete registry data (unknown
feature references, unsupported extensions, removals of absent names) is
tolerated and resolved on a best-effort basis.
"""


class RegistryError(Exception):
    """Base class for all registry errors."""


class MissingInputError(RegistryError, ValueError):
    """A required input (XML element, registry root, registry) was not given."""


class MalformedInputError(RegistryError, ValueError):
    """An input was given but does not have the expected shape."""
