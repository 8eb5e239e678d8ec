"""
Advisor bounded context, domain layer.

This module contains all domain logic for the stock advisor:
- Stock predictions and their verified outcomes
- Chat sessions
- Extraction of structured fields from free-text LLM analyses
- Accuracy scoring used by the verification job
"""
