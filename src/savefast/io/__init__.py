"""Filesystem and HDF5 container access."""
