"""
Implementations Package

Concrete transport implementations.
"""

from submission.implementations.http_transport import HttpTransport
from submission.implementations.mock_transport import MockTransport

__all__ = [
    "HttpTransport",
    "MockTransport",
]
