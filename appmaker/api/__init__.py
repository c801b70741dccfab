"""HTTP API for saved projects and live preview."""
