"""
Modules that take care of establishing an authenticated connection to HDFS.

The connection manager is the entry point. On first use it runs a short pipeline:

* ConfigBuilder assembles the Hadoop client configuration and, on Windows, stages
winutils.exe in a temporary Hadoop home.
* CredentialStager adds Kerberos settings and stages krb5.conf (keytab mode only).
* An AuthStrategy (TokenAuth or KeytabAuth) logs in and opens the client.
* ConnectionCache stores the handle so that the pipeline runs at most once at a time and
never again after it has succeeded.
"""

from .auth import AuthStrategy, KeytabAuth, select_strategy, TokenAuth
from .builder import BackendConfig, ConfigBuilder
from .cache import CacheState, ConnectionCache
from .credentials import CredentialStager
from .manager import ConnectionManager
from .staging import ResourceLocator, StagingDirectory

__all__ = [
    "AuthStrategy",
    "BackendConfig",
    "CacheState",
    "ConfigBuilder",
    "ConnectionCache",
    "ConnectionManager",
    "CredentialStager",
    "KeytabAuth",
    "ResourceLocator",
    "select_strategy",
    "StagingDirectory",
    "TokenAuth",
]
