"""
CryptoFund: crowdfunding platform with an AI stock advisor.

Application package root. This is a modular monolith using
hexagonal architecture (ports & adapters) with domain-driven design.

Bounded contexts:
    - funding: Users, campaigns, contributions, transactions, admin dashboard.
    - advisor: Stock chat, AI predictions, prediction verification, quotes.

Layers:
    - domain: Pure business logic, entities, ports (ABCs), errors.
    - application: Use cases, DTOs, orchestration.
    - infrastructure: Adapters (DB, LLM, market data) implementing domain ports.
    - interfaces: FastAPI routers, Pydantic schemas.
    - shared: Cross-cutting concerns (errors, security, logging).
"""
