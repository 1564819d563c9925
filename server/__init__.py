"""HTTP service for workflow validation and analysis."""
