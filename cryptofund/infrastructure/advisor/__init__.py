"""
Infrastructure adapters for the advisor bounded context.

Each module implements one or more ports defined in domain/advisor/ports.py.
"""
