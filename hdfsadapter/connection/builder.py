"""Module that assembles the Hadoop client configuration."""

import platform
from typing import Dict, Optional
from urllib.parse import urlparse

import hdfsadapter.constants as constants
from hdfsadapter.config import HdfsConfig
from hdfsadapter.errors import ConfigurationError
from hdfsadapter.logger import describe, log
from .staging import export_environment, ResourceLocator, StagingDirectory

# Hadoop client configuration as a plain mapping of string keys to string values.
BackendConfig = Dict[str, str]


class ConfigBuilder:
    """
    Builder of the client configuration for a single initialization attempt.

    On Windows the Hadoop client needs winutils.exe inside a bin directory of its
    home directory, so that layout is recreated in the staging directory as a side
    effect of building the configuration.
    """

    def __init__(
        self,
        config: HdfsConfig,
        staging: StagingDirectory,
        resources: ResourceLocator,
        system: Optional[str] = None,
    ):
        """Instantiate a builder for the given platform (default: the current one)."""
        self._config = config
        self._staging = staging
        self._resources = resources
        self._system = system or platform.system()

    def build(self) -> BackendConfig:
        """Build the client configuration and stage platform-specific artifacts."""
        backend_config: BackendConfig = {
            constants.DEFAULT_FS: self._name_node_url(),
            constants.USE_DATANODE_HOSTNAME: "true",
            constants.HDFS_IMPL: constants.DISTRIBUTED_FILESYSTEM_CLASS,
        }

        if self.requires_native_shim:
            self._stage_native_shim()

        log.debug(f"built client configuration: {describe(backend_config)}")

        return backend_config

    @property
    def requires_native_shim(self) -> bool:
        """Return whether the platform needs winutils.exe to access HDFS."""
        return self._system == constants.NATIVE_SHIM_PLATFORM

    def _name_node_url(self) -> str:
        url = self._config.name_node_url

        if not url:
            raise ConfigurationError("name node url is not configured")

        parsed = urlparse(url)

        if not parsed.scheme or not parsed.netloc:
            raise ConfigurationError(f"malformed name node url: {url}")

        return url

    def _stage_native_shim(self) -> None:
        self._staging.stage(self._resources, constants.WINUTILS_RESOURCE, subdir="bin")

        export_environment(constants.NATIVE_HOME_VARIABLE, self._staging.ensure())
