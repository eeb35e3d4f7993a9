"""Utility modules."""

from pokerlog.utils.errors import (
    EngineError,
    ErrorCode,
    InvalidDocumentError,
    PrizeStructureInvalidError,
)

__all__ = [
    "EngineError",
    "ErrorCode",
    "InvalidDocumentError",
    "PrizeStructureInvalidError",
]
