"""Data providers for fetching carrier pages."""

from .client import AiohttpClient, ClientRegistry, DataProvider, HttpxClient, build_client_registry

__all__ = [
    "AiohttpClient",
    "ClientRegistry",
    "DataProvider",
    "HttpxClient",
    "build_client_registry",
]
