"""
Module implementing the command-line interface of hdfsadapter.

The command line is a connectivity check: it loads the configuration, obtains the
authenticated handle exactly like an application would, and reports the outcome.
"""

import logging
import os
import signal
import sys
from typing import List, NoReturn, Optional

import hdfsadapter.constants as constants
from hdfsadapter.config import Config
from hdfsadapter.connection import ConnectionManager
from hdfsadapter.errors import HdfsConnectionError
from hdfsadapter.logger import log
from .args import Arguments


def main(arguments: Optional[List[str]] = None) -> NoReturn:
    """
    Connect to HDFS with the configuration given by the command-line arguments.

    Defaults to parsing command-line arguments from sys.argv if none are specified.
    """
    args = Arguments.parse(arguments)

    # Configure debug logging.
    if args.debug:
        log.setLevel(logging.DEBUG)
    else:
        log.setLevel(logging.ERROR)

    config = Config.load(os.path.expanduser(args.config))

    try:
        manager = ConnectionManager(config)
        manager.get_handle()
    except KeyboardInterrupt:
        sys.exit(128 + signal.SIGINT)
    except HdfsConnectionError as e:
        log.error(f"failed to connect: {e}")
        sys.exit(constants.HDFSADAPTER_ERROR_CODE)

    mode = manager.auth_mode.name.lower()
    print(f"connected to {config.hdfs.name_node_url} ({mode})")

    sys.exit(0)
