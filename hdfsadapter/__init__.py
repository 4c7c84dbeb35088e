"""Authenticated, lazily established access to HDFS for applications."""
