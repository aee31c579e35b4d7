"""Application use cases: config loading, survey intake and batch runs."""
