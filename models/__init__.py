"""
Models package: provider responses, case analysis and error types.
"""

from .case_analysis import CaseAnalysis
from .errors import (
    CompletionParseError,
    ConfigurationError,
    DirectoryQueryError,
    ExpertSearchError,
    InvalidSearchRequest,
    ServiceError,
    UpstreamServiceError,
)
from .unified_response import CompletionResponse, NormalizedError, TokenUsage

__all__ = [
    "CaseAnalysis",
    "CompletionParseError",
    "CompletionResponse",
    "ConfigurationError",
    "DirectoryQueryError",
    "ExpertSearchError",
    "InvalidSearchRequest",
    "NormalizedError",
    "ServiceError",
    "TokenUsage",
    "UpstreamServiceError",
]
