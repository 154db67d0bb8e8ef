"""f1sessions — Session classifications reconciled from OpenF1 and Jolpica."""

from f1sessions.client import F1SessionsClient, fetch_all_sessions
from f1sessions.exceptions import (
    F1SessionsError,
    ProviderAPIError,
    ProviderConnectionError,
    ProviderTimeoutError,
    ProviderValidationError,
)
from f1sessions.gate import RateGate, RateLimiter, RetryPolicy
from f1sessions.identity import IdentityNormalizer, RosterEntry, load_roster
from f1sessions.models.classification import SessionLabel, WeekendSessions
from f1sessions.orchestrator import SessionOrchestrator

__all__ = [
    "F1SessionsClient",
    "F1SessionsError",
    "IdentityNormalizer",
    "ProviderAPIError",
    "ProviderConnectionError",
    "ProviderTimeoutError",
    "ProviderValidationError",
    "RateGate",
    "RateLimiter",
    "RetryPolicy",
    "RosterEntry",
    "SessionLabel",
    "SessionOrchestrator",
    "WeekendSessions",
    "fetch_all_sessions",
    "load_roster",
]

__version__ = "0.1.0"
