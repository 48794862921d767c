"""API package exports."""

from roomdesk.api.middleware import CorrelationIdMiddleware

__all__ = ["CorrelationIdMiddleware"]
