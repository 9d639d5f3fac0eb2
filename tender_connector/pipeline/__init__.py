"""Search orchestration."""

from .models import SourceReport
from .runner import SearchService

__all__ = ["SearchService", "SourceReport"]
