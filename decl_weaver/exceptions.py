"""Exception hierarchy for decl-weaver.

This module defines the exceptions raised by tree construction, path
resolution and rendering. All exceptions inherit from DeclWeaverError and are
raised synchronously at the call that triggers them; the package never
catches its own errors.
"""


class DeclWeaverError(Exception):
    """Base exception for all decl-weaver errors."""


class ConflictingFlagsError(DeclWeaverError):
    """Raised when namespace flags cannot be combined.

    Covers both a merge where two contributors disagree (e.g. two different
    superclasses) and a single request that sets mutually exclusive flags.
    """


class AmbiguousParameterError(DeclWeaverError):
    """Raised when two keyword aliases for the same field are both supplied."""


class NameResolutionError(DeclWeaverError):
    """Raised when path resolution cannot name some ancestor scope."""


class UsageError(DeclWeaverError):
    """Raised when an operation is called on a node that does not support it."""


class UnknownDialectError(DeclWeaverError):
    """Raised when a dialect name is not registered."""


class LoggingConfigError(DeclWeaverError):
    """Raised when a logging configuration file is not a dictConfig mapping."""
