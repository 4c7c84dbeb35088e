"""Module defining various global constants."""

# hdfsadapter version
VERSION = "1.0.0"

# Exit code for when the connectivity check fails.
HDFSADAPTER_ERROR_CODE = 1

# Names of the bundled resources that are staged on disk or passed by path.
WINUTILS_RESOURCE = "winutils.exe"
KRB5_CONF_RESOURCE = "krb5.conf"
KEYTAB_RESOURCE = "mosip.keytab"

# Platform that requires the native winutils shim (as reported by platform.system()).
NATIVE_SHIM_PLATFORM = "Windows"

# Environment variables through which staged paths are handed to native libraries.
NATIVE_HOME_VARIABLE = "HADOOP_HOME"
KRB5_CONFIG_VARIABLE = "KRB5_CONFIG"

# Hadoop client configuration keys
DEFAULT_FS = "fs.defaultFS"
USE_DATANODE_HOSTNAME = "dfs.client.use.datanode.hostname"
HDFS_IMPL = "fs.hdfs.impl"
DATA_TRANSFER_PROTECTION = "dfs.data.transfer.protection"
SECURITY_AUTHENTICATION = "hadoop.security.authentication"

DISTRIBUTED_FILESYSTEM_CLASS = "org.apache.hadoop.hdfs.DistributedFileSystem"

# JVM options for the Java runtime that libhdfs starts, and the system property through
# which that runtime finds krb5.conf (it does not read KRB5_CONFIG).
LIBHDFS_OPTS_VARIABLE = "LIBHDFS_OPTS"
KRB5_CONF_PROPERTY = "java.security.krb5.conf"
