"""
Staging of bundled resources on the local disk.

Native Hadoop and Kerberos libraries only accept file system paths, so bundled
resources like winutils.exe and krb5.conf are copied into a temporary directory and
their locations are handed over through environment variables.
"""

import atexit
import os
import shutil
import tempfile
import threading
from typing import IO, Optional

import hdfsadapter.constants as constants
from hdfsadapter.errors import StagingError
from hdfsadapter.logger import log


class ResourceLocator:
    """Lookup of bundled resources by name within a resources directory."""

    def __init__(self, base_path: str):
        """Instantiate a locator for resources stored in the specified directory."""
        self._base_path = base_path

    def path(self, name: str) -> str:
        """Return the path to a bundled resource, which must exist."""
        path = os.path.join(self._base_path, name)

        if not os.path.isfile(path):
            raise StagingError(f"bundled resource {name} not found")

        return path

    def open(self, name: str) -> IO[bytes]:
        """Open a bundled resource as a byte stream."""
        try:
            return open(self.path(name), "rb")
        except OSError as e:
            raise StagingError(f"failed to read bundled resource {name}") from e


class StagingDirectory:
    """
    Temporary directory that holds copies of bundled resources.

    The directory is only created once something needs to be staged and is then reused
    for the lifetime of this object, so a retried initialization overwrites the copies
    of an earlier failed attempt instead of creating another directory. It is left on
    disk afterwards unless cleanup_on_exit is set, because the ticket cache stored in it
    must remain readable for as long as the connection is in use.
    """

    def __init__(
        self,
        prefix: str = "hadoop-lib",
        base_dir: Optional[str] = None,
        cleanup_on_exit: bool = False,
    ):
        """Prepare (but do not yet create) a staging directory."""
        self._prefix = prefix
        self._base_dir = base_dir
        self._cleanup_on_exit = cleanup_on_exit

        self._path: Optional[str] = None
        self._lock = threading.Lock()

    @property
    def path(self) -> Optional[str]:
        """Return the path of the directory, or None if it has not been created."""
        return self._path

    def ensure(self) -> str:
        """Create the staging directory if it doesn't exist yet and return its path."""
        with self._lock:
            if self._path is None:
                try:
                    self._path = tempfile.mkdtemp(
                        prefix=self._prefix, dir=self._base_dir
                    )
                except OSError as e:
                    raise StagingError("failed to create staging directory") from e

                log.debug(f"created staging directory {self._path}")

                if self._cleanup_on_exit:
                    atexit.register(self.cleanup)

            return self._path

    def stage(
        self, resources: ResourceLocator, name: str, subdir: Optional[str] = None
    ) -> str:
        """Copy a bundled resource into the staging directory and return its path."""
        target_dir = self.ensure()

        if subdir:
            target_dir = os.path.join(target_dir, subdir)

        target = os.path.join(target_dir, name)

        with resources.open(name) as source:
            try:
                os.makedirs(target_dir, exist_ok=True)

                with open(target, "wb") as f:
                    shutil.copyfileobj(source, f)
            except OSError as e:
                raise StagingError(f"failed to stage {name}") from e

        log.debug(f"staged {name} at {target}")

        return target

    def cleanup(self) -> None:
        """Remove the staging directory and everything in it."""
        with self._lock:
            if self._path is not None:
                shutil.rmtree(self._path, ignore_errors=True)
                self._path = None


def export_environment(name: str, value: str) -> None:
    """
    Hand a staged path over to native libraries through the process environment.

    This is a process-wide side effect, which is why all of them go through here.
    """
    log.debug(f"exporting {name}={value}")
    os.environ[name] = value


def export_jvm_property(name: str, value: str) -> None:
    """
    Hand a system property to the JVM that libhdfs starts through LIBHDFS_OPTS.

    Other options in LIBHDFS_OPTS are kept, and an earlier value of the same property is
    replaced, so repeated initialization attempts don't pile up duplicates.
    """
    prefix = f"-D{name}="

    options = [
        option
        for option in os.environ.get(constants.LIBHDFS_OPTS_VARIABLE, "").split()
        if not option.startswith(prefix)
    ]
    options.append(prefix + value)

    export_environment(constants.LIBHDFS_OPTS_VARIABLE, " ".join(options))
