import logging
import os.path

from configparser import ConfigParser

from hdfsadapter.config import AuthMode, Config, HdfsConfig, StagingConfig


def test_hdfs_config_defaults():
    parser = ConfigParser()
    parser.read_string("[hdfs]")

    cfg = HdfsConfig.load(parser["hdfs"])

    assert cfg.name_node_url == ""
    assert not cfg.authentication_enabled
    assert not cfg.cache_failures
    assert cfg.auth_mode == AuthMode.TOKEN


def test_hdfs_config_load():
    parser = ConfigParser()
    parser.read_string(
        """
        [hdfs]
        name_node_url = hdfs://namenode:8020
        kdc_domain = EXAMPLE.COM
        user_name = mosip
        user_pass = secret
        authentication_enabled = true
        cache_failures = yes
        """
    )

    cfg = HdfsConfig.load(parser["hdfs"])

    assert cfg.name_node_url == "hdfs://namenode:8020"
    assert cfg.kdc_domain == "EXAMPLE.COM"
    assert cfg.user_name == "mosip"
    assert cfg.user_pass == "secret"
    assert cfg.cache_failures
    assert cfg.auth_mode == AuthMode.KEYTAB


def test_hdfs_config_hides_credentials():
    cfg = HdfsConfig(
        name_node_url="hdfs://namenode:8020",
        kdc_domain="EXAMPLE.COM",
        user_name="mosip",
        user_pass="secret",
    )

    assert "hdfs://namenode:8020" in repr(cfg)
    assert "secret" not in repr(cfg)
    assert "mosip" not in repr(cfg)
    assert "EXAMPLE.COM" not in repr(cfg)


def test_config_load_does_not_log_principal(tmp_path, caplog):
    (tmp_path / "config").write_text(
        """
        [hdfs]
        name_node_url = hdfs://namenode:8020
        kdc_domain = EXAMPLE.COM
        user_name = mosip
        """
    )

    with caplog.at_level(logging.INFO, logger="hdfsadapter"):
        Config.load(str(tmp_path / "config"))

    assert "loaded config" in caplog.text
    assert "mosip" not in caplog.text
    assert "EXAMPLE.COM" not in caplog.text


def test_staging_config_load():
    parser = ConfigParser()
    parser.read_string(
        """
        [staging]
        resources_path = ~/resources
        prefix = staging-
        base_dir = ~/tmp
        ticket_cache = ~/krb5cc
        cleanup_on_exit = true
        """
    )

    cfg = StagingConfig.load(parser["staging"])

    assert cfg.resources_path == os.path.expanduser("~/resources")
    assert cfg.prefix == "staging-"
    assert cfg.base_dir == os.path.expanduser("~/tmp")
    assert cfg.ticket_cache == os.path.expanduser("~/krb5cc")
    assert cfg.cleanup_on_exit


def test_staging_config_empty_paths():
    parser = ConfigParser()
    parser.read_string(
        """
        [staging]
        base_dir =
        ticket_cache =
        """
    )

    cfg = StagingConfig.load(parser["staging"])

    assert cfg.base_dir is None
    assert cfg.ticket_cache is None


def test_config_defaults(tmpdir):
    cfg = Config.load(str(tmpdir / "nonexistent"))

    assert cfg.hdfs is not None
    assert cfg.staging is not None


def test_config_load(tmp_path):
    (tmp_path / "config").write_text(
        """
        [hdfs]
        name_node_url = hdfs://namenode:8020
        user_name = mosip

        [staging]
        prefix = staging-
        """
    )

    cfg = Config.load(str(tmp_path / "config"))

    assert cfg.hdfs.name_node_url == "hdfs://namenode:8020"
    assert cfg.hdfs.user_name == "mosip"
    assert cfg.staging.prefix == "staging-"


def test_config_load_failure_nonfatal(tmp_path):
    (tmp_path / "config").write_text("blabla")

    cfg = Config.load(str(tmp_path / "config"))

    assert cfg.hdfs is not None


def test_config_invalid_boolean_nonfatal(tmp_path, caplog):
    (tmp_path / "config").write_text(
        """
        [hdfs]
        authentication_enabled = maybe
        """
    )

    cfg = Config.load(str(tmp_path / "config"))

    assert not cfg.hdfs.authentication_enabled
    assert "failed to read config file" in caplog.text
