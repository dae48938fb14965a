"""
Interfaces Package

Abstract interfaces for transport implementations.
"""

from submission.interfaces.transport_interface import (
    SubmissionError,
    TransportInterface,
    TransportOutcome,
)

__all__ = [
    "TransportInterface",
    "TransportOutcome",
    "SubmissionError",
]
