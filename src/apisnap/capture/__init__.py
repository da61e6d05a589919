"""
apisnap Capture Module

Endpoint configuration, HTTP fetching, normalization and capture of API
responses into before/after directories.
"""

from .normalizer import normalize_response, SENTINEL_TIMESTAMP, VOLATILE_KEYS
from .endpoints import Endpoint, EndpointConfig
from .fetcher import ApiClient, FetchError, FetchedResponse
from .capturer import ResponseCapturer, CaptureSummary

__all__ = [
    'normalize_response',
    'SENTINEL_TIMESTAMP',
    'VOLATILE_KEYS',
    'Endpoint',
    'EndpointConfig',
    'ApiClient',
    'FetchError',
    'FetchedResponse',
    'ResponseCapturer',
    'CaptureSummary',
]
