"""
Test suite for savefast.

Contains unit tests for classification, the overwrite guard and path handling,
and integration tests that write and read real HDF5 files.
"""
