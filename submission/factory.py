"""
Transport Factory

Factory pattern for creating transport implementations.

Automatically configures from environment variables.
"""

import logging
from typing import Literal, Optional

from config.settings import ANALYSIS_API_BASE_URL
from submission.implementations.http_transport import HttpTransport
from submission.implementations.mock_transport import MockTransport
from submission.interfaces.transport_interface import TransportInterface

# Type alias
TransportMode = Literal["auto", "http", "mock"]


class TransportFactory:
    """
    Factory for creating transport implementations.

    Reads configuration from environment variables:
    - ANALYSIS_API_BASE_URL: Base URL of the analysis service

    Usage:
        # Auto-detect from environment
        transport = TransportFactory.create_transport()

        # Force mock for testing
        transport = TransportFactory.create_transport(mode="mock")
    """

    _logger = logging.getLogger(__name__)

    @classmethod
    def create_transport(
        cls,
        mode: TransportMode = "auto",
        base_url: Optional[str] = None,
    ) -> TransportInterface:
        """
        Create a transport instance.

        Args:
            mode: "auto" (from env), "http" (force real), "mock" (force sim)
            base_url: Override the service URL from settings

        Returns:
            TransportInterface implementation

        Raises:
            ValueError: If mode is unknown
            RuntimeError: If mode="http" but no base URL is configured
        """
        if mode == "mock":
            cls._logger.info("Creating Mock Transport (forced)")
            return MockTransport()

        if mode == "http":
            url = base_url or ANALYSIS_API_BASE_URL
            if not url:
                raise RuntimeError(
                    "HTTP transport requested but ANALYSIS_API_BASE_URL is not set",
                )
            cls._logger.info("Creating HTTP Transport (forced)")
            return HttpTransport(base_url=url)

        if mode != "auto":
            raise ValueError(f"Unknown transport mode: {mode}")

        # mode == "auto" - use HTTP whenever a service URL is configured
        if base_url or cls.is_http_configured():
            cls._logger.info("Creating HTTP Transport (auto-detected)")
            return HttpTransport(base_url=base_url or ANALYSIS_API_BASE_URL)

        cls._logger.warning(
            "ANALYSIS_API_BASE_URL is empty, using Mock Transport",
        )
        return MockTransport()

    @classmethod
    def is_http_configured(cls) -> bool:
        """True if settings name an analysis service"""
        return bool(ANALYSIS_API_BASE_URL)


# Convenience function for quick creation
def create_transport(
    force_mock: bool = False,
    base_url: Optional[str] = None,
) -> TransportInterface:
    """
    Quick transport creation with simple mock override.

    Example:
        transport = create_transport()
        transport = create_transport(force_mock=True)
    """
    mode = "mock" if force_mock else "auto"
    return TransportFactory.create_transport(mode=mode, base_url=base_url)
