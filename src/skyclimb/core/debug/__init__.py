"""Console diagnostics."""
