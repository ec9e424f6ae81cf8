# ABOUTME: Observability components package
# ABOUTME: Exports the request serializer and the best-effort instrumenter

from .instrumenter import Instrumenter
from .request_serializer import FILTERED_VALUE, RequestSerializer

__all__ = ["Instrumenter", "FILTERED_VALUE", "RequestSerializer"]
