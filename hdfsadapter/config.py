"""Module for configuration variables with defaults that are overridable by a file."""

from __future__ import annotations

from configparser import ConfigParser, SectionProxy
from dataclasses import dataclass, field
from enum import auto, Enum
import os
from typing import Optional

from hdfsadapter.logger import log


class AuthMode(Enum):
    """Mutually exclusive ways of authenticating against the cluster."""

    TOKEN = auto()
    KEYTAB = auto()


@dataclass
class HdfsConfig:
    """Configuration variables related to the cluster and its credentials."""

    name_node_url: str = ""

    # Credentials (and the two halves of the principal) are kept out of repr() so they
    # never end up in the log.
    kdc_domain: str = field(default="", repr=False)
    user_name: str = field(default="", repr=False)
    user_pass: str = field(default="", repr=False)

    authentication_enabled: bool = False

    # Re-raise the first initialization failure instead of retrying on later calls.
    cache_failures: bool = False

    @property
    def auth_mode(self) -> AuthMode:
        """Return the authentication mode selected by this configuration."""
        return AuthMode.KEYTAB if self.authentication_enabled else AuthMode.TOKEN

    @staticmethod
    def load(section: SectionProxy) -> HdfsConfig:
        """Load overridden variables from a section within a config file."""
        config = HdfsConfig()

        config.name_node_url = section.get("name_node_url", fallback="").strip()
        config.kdc_domain = section.get("kdc_domain", fallback="").strip()

        config.user_name = section.get("user_name", fallback="").strip()
        config.user_pass = section.get("user_pass", fallback="")

        config.authentication_enabled = section.getboolean(
            "authentication_enabled", fallback=config.authentication_enabled
        )
        config.cache_failures = section.getboolean(
            "cache_failures", fallback=config.cache_failures
        )

        return config


@dataclass
class StagingConfig:
    """Configuration variables related to bundled resources and their staging."""

    resources_path: str = os.path.expanduser("~/.hdfsadapter/resources")

    prefix: str = "hadoop-lib"

    # Parent of the staging directory, defaults to the system temp directory.
    base_dir: Optional[str] = None

    # Defaults to a ticket cache inside the staging directory.
    ticket_cache: Optional[str] = None

    cleanup_on_exit: bool = False

    @staticmethod
    def load(section: SectionProxy) -> StagingConfig:
        """Load overridden variables from a section within a config file."""
        config = StagingConfig()

        config.resources_path = os.path.expanduser(
            section.get("resources_path", fallback=config.resources_path)
        )
        config.prefix = section.get("prefix", fallback=config.prefix)

        base_dir = section.get("base_dir", fallback="").strip()
        config.base_dir = os.path.expanduser(base_dir) if base_dir else None

        ticket_cache = section.get("ticket_cache", fallback="").strip()
        config.ticket_cache = os.path.expanduser(ticket_cache) if ticket_cache else None

        config.cleanup_on_exit = section.getboolean(
            "cleanup_on_exit", fallback=config.cleanup_on_exit
        )

        return config


@dataclass
class Config:
    """Configuration variables."""

    hdfs: HdfsConfig = field(default_factory=HdfsConfig)
    staging: StagingConfig = field(default_factory=StagingConfig)

    @staticmethod
    def load(filename: str) -> Config:
        """Load overridden configuration variables from a config file."""
        parser = ConfigParser()

        config = Config()

        try:
            with open(filename, "r") as f:
                parser.read_string(f.read(), filename)

            if "hdfs" in parser:
                config.hdfs = HdfsConfig.load(parser["hdfs"])
            if "staging" in parser:
                config.staging = StagingConfig.load(parser["staging"])
        except FileNotFoundError:
            log.info(f"no config file at {filename}")
        except Exception as e:
            # Missing connection parameters are reported once a connection is
            # requested, so an unreadable file falls back to defaults here.
            log.error(f"failed to read config file {filename}: {e}")
        else:
            log.info(f"loaded config: {config}")

        return config
