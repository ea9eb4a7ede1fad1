from tokengate.models.account import Account
from tokengate.models.refresh_session import RefreshSession

__all__ = [
    "Account",
    "RefreshSession",
]
