"""
Domain-specific errors for the funding bounded context.

All errors raised from the funding domain must be defined here.
These are mapped to HTTP responses at the interface layer.
No framework imports allowed.
"""


class FundingDomainError(Exception):
    """Base error for all funding domain errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class UserNotFoundError(FundingDomainError):
    """Raised when a user cannot be found."""

    def __init__(self, user_id: str) -> None:
        super().__init__(f"User not found: {user_id}")
        self.user_id = user_id


class EmailAlreadyRegisteredError(FundingDomainError):
    """Raised when registering an email that already has an account."""

    def __init__(self, email: str) -> None:
        super().__init__(f"Email already registered: {email}")
        self.email = email


class CampaignNotFoundError(FundingDomainError):
    """Raised when a campaign cannot be found."""

    def __init__(self, campaign_id: str) -> None:
        super().__init__(f"Campaign not found: {campaign_id}")
        self.campaign_id = campaign_id


class CampaignNotActiveError(FundingDomainError):
    """Raised when contributing to a campaign that is not accepting funds."""

    def __init__(self, campaign_id: str, status: str) -> None:
        super().__init__(f"Campaign {campaign_id} is not active (status: {status})")
        self.campaign_id = campaign_id
        self.status = status


class NotAuthenticatedError(FundingDomainError):
    """Raised when a request carries no known user."""

    def __init__(self) -> None:
        super().__init__("Authentication required")


class PermissionDeniedError(FundingDomainError):
    """Raised when a user acts on a resource they do not own."""

    def __init__(self, action: str) -> None:
        super().__init__(f"Permission denied: {action}")
        self.action = action


class InvalidCampaignStatusError(FundingDomainError):
    """Raised when a campaign is moved to a status owners cannot set."""

    def __init__(self, status: str) -> None:
        super().__init__(f"Invalid campaign status: {status}")
        self.status = status


class InvalidAmountError(FundingDomainError):
    """Raised when a goal or contribution amount is not positive."""

    def __init__(self, amount: float) -> None:
        super().__init__(f"Amount must be positive, got {amount}")
        self.amount = amount
