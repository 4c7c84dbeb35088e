"""Module that opens the backend HDFS client."""

from typing import Mapping, Optional

from pyarrow import fs


def open_filesystem(
    config: Mapping[str, str],
    user: Optional[str] = None,
    kerb_ticket: Optional[str] = None,
) -> fs.HadoopFileSystem:
    """
    Open a HadoopFileSystem using the given client configuration.

    The "default" host makes libhdfs connect to the fs.defaultFS entry of the
    configuration. Connection failures are raised by pyarrow as OSError.
    """
    return fs.HadoopFileSystem(
        "default",
        port=0,
        user=user,
        kerb_ticket=kerb_ticket,
        extra_conf=dict(config),
    )
