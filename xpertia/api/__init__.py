"""Async client for the Xpertia student API."""

from .client import ApiClient, APIError
from .student import StudentApi

__all__ = ["ApiClient", "APIError", "StudentApi"]
