"""
Application layer for the funding bounded context.

Use cases coordinate users, campaigns and the contribution ledger.
No framework or infrastructure imports allowed.
"""
