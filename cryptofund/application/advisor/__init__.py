"""
Application layer for the advisor bounded context.

Use cases coordinate domain entities and ports to fulfill
chat, prediction and market data operations.
No framework or infrastructure imports allowed.
"""
