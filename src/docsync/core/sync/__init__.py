"""
Docs sync service: refresh generated doc regions from beads.
"""

from .models import DocumentOutcome, DocumentState, SyncResult
from .service import DocSyncService

__all__ = [
    "DocSyncService",
    "SyncResult",
    "DocumentOutcome",
    "DocumentState",
]
