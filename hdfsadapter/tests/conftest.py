"""Module with fixtures shared by the connection tests."""

import pytest

import hdfsadapter.constants as constants
from hdfsadapter.config import Config


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Restore the variables that staging exports to the process environment."""
    for name in (
        constants.NATIVE_HOME_VARIABLE,
        constants.KRB5_CONFIG_VARIABLE,
        constants.LIBHDFS_OPTS_VARIABLE,
    ):
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)


@pytest.fixture
def resources_path(tmp_path):
    """Create a resources directory with all bundled artifacts."""
    path = tmp_path / "resources"
    path.mkdir()

    (path / constants.WINUTILS_RESOURCE).write_bytes(b"MZ winutils")
    (path / constants.KRB5_CONF_RESOURCE).write_text("[libdefaults]\n")
    (path / constants.KEYTAB_RESOURCE).write_bytes(b"\x05\x02keytab")

    return path


@pytest.fixture
def config(tmp_path, resources_path):
    """Create a token authentication config that stages below tmp_path."""
    cfg = Config()

    cfg.hdfs.name_node_url = "hdfs://namenode:8020"
    cfg.hdfs.kdc_domain = "EXAMPLE.COM"
    cfg.hdfs.user_name = "mosip"
    cfg.hdfs.user_pass = "secret"

    cfg.staging.resources_path = str(resources_path)
    cfg.staging.base_dir = str(tmp_path)

    return cfg


@pytest.fixture
def keytab_config(config):
    """Create a keytab authentication config."""
    config.hdfs.authentication_enabled = True
    return config
