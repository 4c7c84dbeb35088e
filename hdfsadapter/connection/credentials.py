"""Module that stages the Kerberos protocol configuration for keytab logins."""

from types import MappingProxyType
from typing import Mapping

import hdfsadapter.constants as constants
from hdfsadapter.logger import log
from .builder import BackendConfig
from .staging import (
    export_environment,
    export_jvm_property,
    ResourceLocator,
    StagingDirectory,
)


class CredentialStager:
    """Preparation of security settings and artifacts required by KeytabAuth."""

    SECURITY_PROPERTIES = MappingProxyType(
        {
            constants.DATA_TRANSFER_PROTECTION: "authentication",
            constants.SECURITY_AUTHENTICATION: "kerberos",
        }
    )

    def __init__(self, staging: StagingDirectory, resources: ResourceLocator):
        """Instantiate a stager that copies resources into the staging directory."""
        self._staging = staging
        self._resources = resources

    def stage_security_artifacts(self, config: Mapping[str, str]) -> BackendConfig:
        """
        Return the configuration extended with Kerberos settings.

        The bundled krb5.conf is copied into the staging directory and exported so that
        both the Kerberos library used for logging in and the JVM behind libhdfs pick it
        up.
        """
        krb5_conf = self._staging.stage(self._resources, constants.KRB5_CONF_RESOURCE)
        export_environment(constants.KRB5_CONFIG_VARIABLE, krb5_conf)
        export_jvm_property(constants.KRB5_CONF_PROPERTY, krb5_conf)

        log.debug("enabled kerberos security properties")

        return {**config, **self.SECURITY_PROPERTIES}
