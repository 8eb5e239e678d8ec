"""
Funding bounded context, domain layer.

This module contains all domain logic for crowdfunding:
- User profiles and admin flags
- Campaigns and their lifecycle status
- Contributions and the transaction ledger
"""
