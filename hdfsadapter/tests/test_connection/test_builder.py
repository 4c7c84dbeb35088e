import os

import pytest

import hdfsadapter.constants as constants
from hdfsadapter.connection.builder import ConfigBuilder
from hdfsadapter.connection.staging import ResourceLocator, StagingDirectory
from hdfsadapter.errors import ConfigurationError, StagingError


def create_builder(config, tmp_path, system="Linux"):
    staging = StagingDirectory(base_dir=str(tmp_path))
    resources = ResourceLocator(config.staging.resources_path)

    return ConfigBuilder(config.hdfs, staging, resources, system=system), staging


def test_build_sets_connection_properties(config, tmp_path):
    builder, _ = create_builder(config, tmp_path)

    backend_config = builder.build()

    assert backend_config == {
        "fs.defaultFS": "hdfs://namenode:8020",
        "dfs.client.use.datanode.hostname": "true",
        "fs.hdfs.impl": "org.apache.hadoop.hdfs.DistributedFileSystem",
    }


def test_build_without_native_shim(config, tmp_path):
    builder, staging = create_builder(config, tmp_path, system="Linux")

    builder.build()

    assert not builder.requires_native_shim
    assert staging.path is None
    assert constants.NATIVE_HOME_VARIABLE not in os.environ


def test_build_with_native_shim(config, tmp_path):
    builder, staging = create_builder(config, tmp_path, system="Windows")

    builder.build()

    assert builder.requires_native_shim

    shim = os.path.join(staging.path, "bin", constants.WINUTILS_RESOURCE)
    assert os.path.isfile(shim)
    assert os.environ[constants.NATIVE_HOME_VARIABLE] == staging.path


def test_build_missing_native_shim(config, tmp_path, resources_path):
    (resources_path / constants.WINUTILS_RESOURCE).unlink()
    builder, _ = create_builder(config, tmp_path, system="Windows")

    with pytest.raises(StagingError):
        builder.build()

    assert constants.NATIVE_HOME_VARIABLE not in os.environ


def test_build_defaults_to_current_platform(config, tmp_path, monkeypatch):
    staging = StagingDirectory(base_dir=str(tmp_path))
    resources = ResourceLocator(config.staging.resources_path)

    monkeypatch.setattr("platform.system", lambda: "Windows")
    builder = ConfigBuilder(config.hdfs, staging, resources)

    assert builder.requires_native_shim


@pytest.mark.parametrize("url", ["", "namenode:8020", "hdfs://"])
def test_build_invalid_name_node_url(config, tmp_path, url):
    config.hdfs.name_node_url = url
    builder, _ = create_builder(config, tmp_path)

    with pytest.raises(ConfigurationError):
        builder.build()
