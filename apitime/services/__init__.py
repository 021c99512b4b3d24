"""Services Layer — the operation runner that drives the pipeline."""
