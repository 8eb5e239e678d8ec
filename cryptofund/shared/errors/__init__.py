"""
Shared error handling package.

Centralizes error-to-HTTP mapping so that domain errors from both
bounded contexts are consistently translated into API responses.
"""
