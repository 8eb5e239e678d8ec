"""HTTP interface for users, campaigns and contributions."""
