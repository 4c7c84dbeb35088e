"""Module that wires the connection pipeline together behind a single entry point."""

from types import MappingProxyType
from typing import Any, Optional

from hdfsadapter.config import AuthMode, Config
from hdfsadapter.errors import HdfsConnectionError, Phase
from hdfsadapter.logger import log
from .auth import KeytabLogin, Opener, select_strategy
from .builder import ConfigBuilder
from .cache import CacheState, ConnectionCache
from .client import open_filesystem
from .credentials import CredentialStager
from .kerberos import login_from_keytab
from .staging import ResourceLocator, StagingDirectory


class ConnectionManager:
    """
    Provider of a lazily established, authenticated HDFS handle.

    The first call to get_handle() builds the client configuration, stages the required
    artifacts, logs in with the configured strategy and caches the resulting handle.
    Every later call returns that same handle without touching the cluster.
    """

    def __init__(
        self,
        config: Config,
        cache: Optional[ConnectionCache] = None,
        opener: Opener = open_filesystem,
        keytab_login: KeytabLogin = login_from_keytab,
        system: Optional[str] = None,
    ):
        """Instantiate a connection manager, optionally with injected collaborators."""
        self._config = config
        self._system = system

        self._cache = cache or ConnectionCache(config.hdfs.cache_failures)

        self._resources = ResourceLocator(config.staging.resources_path)
        self._staging = StagingDirectory(
            prefix=config.staging.prefix,
            base_dir=config.staging.base_dir,
            cleanup_on_exit=config.staging.cleanup_on_exit,
        )

        self._strategy = select_strategy(
            config, self._resources, self._staging, opener, keytab_login
        )

    @property
    def auth_mode(self) -> AuthMode:
        """Return the authentication mode used by this manager."""
        return self._strategy.mode

    @property
    def staging(self) -> StagingDirectory:
        """Return the staging directory used for bundled artifacts."""
        return self._staging

    @property
    def state(self) -> CacheState:
        """Return the lifecycle state of the cached handle."""
        return self._cache.state

    def get_handle(self) -> Any:
        """Return the authenticated handle, connecting on first use."""
        return self._cache.get_or_init(self._initialize)

    def _initialize(self) -> Any:
        mode = self.auth_mode.name.lower()
        log.info(f"connecting to hdfs with {mode} authentication")

        phase = Phase.CONFIGURATION

        try:
            backend_config = ConfigBuilder(
                self._config.hdfs, self._staging, self._resources, self._system
            ).build()

            if self.auth_mode == AuthMode.KEYTAB:
                phase = Phase.STAGING
                stager = CredentialStager(self._staging, self._resources)
                backend_config = stager.stage_security_artifacts(backend_config)

            phase = Phase.LOGIN
            handle = self._strategy.login(MappingProxyType(backend_config))
        except HdfsConnectionError as e:
            log.error(f"failed to connect to hdfs: {e}")
            raise
        except Exception as e:
            error = HdfsConnectionError(
                f"unexpected {type(e).__name__} while connecting", phase
            )
            log.error(f"failed to connect to hdfs: {error}")
            raise error from e

        log.info(f"connected to {self._config.hdfs.name_node_url}")

        return handle
