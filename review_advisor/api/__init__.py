"""HTTP API for review summaries and advice."""
