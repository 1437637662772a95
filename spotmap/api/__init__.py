"""HTTP API for spotmap."""
