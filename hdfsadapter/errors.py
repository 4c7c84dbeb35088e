"""
Exceptions raised while establishing a connection to HDFS.

Callers of the connection manager only ever see HdfsConnectionError (or one of its
subclasses). Every error records the phase of the initialization pipeline that failed
so that a broken keytab can be told apart from an unreachable name node. The original
exception is always chained as __cause__ but kept out of the message.
"""

from enum import Enum
from typing import Optional


class Phase(Enum):
    """Phases of connection initialization."""

    CONFIGURATION = "configuration"
    STAGING = "staging"
    LOGIN = "login"
    OPEN = "open"


class HdfsConnectionError(Exception):
    """Failure to provide an authenticated HDFS handle."""

    default_phase = Phase.OPEN

    def __init__(self, message: str, phase: Optional[Phase] = None):
        """Create an error for the given initialization phase."""
        super().__init__(message)

        self.phase = phase or self.default_phase

    def __str__(self) -> str:
        # Causes may name the principal, so they are left out of the message
        return f"{self.phase.value} failed: {super().__str__()}"


class ConfigurationError(HdfsConnectionError):
    """A required connection parameter is missing or malformed."""

    default_phase = Phase.CONFIGURATION


class StagingError(HdfsConnectionError):
    """A staging directory or bundled artifact could not be prepared."""

    default_phase = Phase.STAGING


class LoginError(HdfsConnectionError):
    """Authentication against the Kerberos domain failed."""

    default_phase = Phase.LOGIN
