"""
Authentication strategies that turn a client configuration into an open handle.

Exactly one strategy is selected per connection manager, based on whether
authentication is enabled:

* TokenAuth impersonates the configured user without exchanging any secret. This is the
default for trusted deployments where HDFS runs with simple authentication.
* KeytabAuth logs in as user@domain with a bundled keytab and opens the client with the
resulting Kerberos ticket cache.
"""

from abc import ABC
import os
import threading
from typing import Any, Callable, Mapping, Optional

import fasteners

import hdfsadapter.constants as constants
from hdfsadapter.config import AuthMode, Config
from hdfsadapter.errors import HdfsConnectionError, LoginError, Phase, StagingError
from hdfsadapter.logger import log
from .client import open_filesystem
from .kerberos import login_from_keytab
from .staging import ResourceLocator, StagingDirectory

# Opens the backend client, see client.open_filesystem.
Opener = Callable[..., Any]

# Logs in from a keytab, see kerberos.login_from_keytab.
KeytabLogin = Callable[[str, str, str], None]

_interrupts = threading.local()


def interrupted() -> bool:
    """Return whether a login on the current thread was interrupted."""
    return getattr(_interrupts, "flag", False)


def clear_interrupted() -> None:
    """Reset the interrupt flag of the current thread."""
    _interrupts.flag = False


def _mark_interrupted() -> None:
    _interrupts.flag = True


class AuthStrategy(ABC):
    """Base class for ways to log in and open the backend client."""

    mode: AuthMode

    def login(self, config: Mapping[str, str]) -> Any:
        """Authenticate and return an open client for the given configuration."""
        raise NotImplementedError()


class TokenAuth(AuthStrategy):
    """Impersonation of a configured user with token authentication."""

    mode = AuthMode.TOKEN

    def __init__(self, user_name: str, opener: Opener = open_filesystem):
        """Instantiate token authentication as the specified user."""
        self._user_name = user_name
        self._opener = opener

    def login(self, config: Mapping[str, str]) -> Any:
        """Open the client on behalf of the impersonated user."""
        try:
            return self._opener(config, user=self._user_name)
        except InterruptedError as e:
            # Leave a trace for cancellation-aware callers on this thread
            _mark_interrupted()
            raise HdfsConnectionError(
                "impersonation was interrupted", Phase.LOGIN
            ) from e
        except OSError as e:
            raise HdfsConnectionError("failed to open filesystem") from e


class KeytabAuth(AuthStrategy):
    """
    Kerberos login of user@domain with a keytab.

    Expects CredentialStager to have prepared the configuration and krb5.conf. The
    ticket cache is written under an inter-process lock because it may be configured to
    a location that is shared by multiple processes.
    """

    mode = AuthMode.KEYTAB

    def __init__(
        self,
        user_name: str,
        kdc_domain: str,
        resources: ResourceLocator,
        staging: StagingDirectory,
        ticket_cache: Optional[str] = None,
        opener: Opener = open_filesystem,
        keytab_login: KeytabLogin = login_from_keytab,
    ):
        """Instantiate keytab authentication for the specified user and domain."""
        self._user_name = user_name
        self._kdc_domain = kdc_domain
        self._resources = resources
        self._staging = staging
        self._ticket_cache = ticket_cache
        self._opener = opener
        self._keytab_login = keytab_login

    @property
    def principal(self) -> str:
        """Return the Kerberos principal to log in as."""
        return f"{self._user_name}@{self._kdc_domain}"

    def login(self, config: Mapping[str, str]) -> Any:
        """Log in from the keytab and open the client with the obtained ticket."""
        keytab = self._resources.path(constants.KEYTAB_RESOURCE)
        ticket_cache = self._ticket_cache_path()

        lock = fasteners.InterProcessLock(f"{ticket_cache}.lock")

        try:
            lock.acquire()
        except (OSError, threading.ThreadError) as e:
            raise StagingError("failed to lock ticket cache") from e

        try:
            self._keytab_login(self.principal, keytab, ticket_cache)
        except LoginError:
            raise
        except Exception as e:
            raise LoginError("kerberos login from keytab failed") from e
        finally:
            lock.release()

        log.debug(f"obtained kerberos ticket in {ticket_cache}")

        try:
            return self._opener(config, kerb_ticket=ticket_cache)
        except OSError as e:
            raise HdfsConnectionError("failed to open filesystem") from e

    def _ticket_cache_path(self) -> str:
        if self._ticket_cache:
            return self._ticket_cache

        return os.path.join(self._staging.ensure(), "krb5cc")


def select_strategy(
    config: Config,
    resources: ResourceLocator,
    staging: StagingDirectory,
    opener: Opener = open_filesystem,
    keytab_login: KeytabLogin = login_from_keytab,
) -> AuthStrategy:
    """Create the authentication strategy that the configuration asks for."""
    if config.hdfs.auth_mode == AuthMode.KEYTAB:
        return KeytabAuth(
            config.hdfs.user_name,
            config.hdfs.kdc_domain,
            resources,
            staging,
            ticket_cache=config.staging.ticket_cache,
            opener=opener,
            keytab_login=keytab_login,
        )
    else:
        return TokenAuth(config.hdfs.user_name, opener=opener)
