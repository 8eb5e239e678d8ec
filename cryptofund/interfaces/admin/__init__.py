"""HTTP interface for the admin dashboard."""
