"""
Infrastructure adapters for the funding bounded context.

Each module implements one or more ports defined in domain/funding/ports.py.
"""
