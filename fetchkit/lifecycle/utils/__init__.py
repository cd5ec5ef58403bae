"""Utility functions."""

from .http import request_for

__all__ = ["request_for"]
