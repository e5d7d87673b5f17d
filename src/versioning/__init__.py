"""Tool version numbers, binaries and storage names."""
