"""HTTP interface for the advisor bounded context."""
