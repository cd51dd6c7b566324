"""Pydantic data models for preload-store."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel


class PreloadStatus(str, Enum):
    """States a domain moves through in the preload pipeline."""

    UNKNOWN = "unknown"
    PENDING = "pending"
    PRELOADED = "preloaded"
    REJECTED = "rejected"
    REMOVED = "removed"
    PENDING_REMOVAL = "pending-removal"


class DomainState(BaseModel):
    """The persisted state of a single domain.

    ``name`` is the primary key.  It is never written into the stored value
    and is always rebuilt from the key on read.
    """

    name: str
    status: PreloadStatus = PreloadStatus.UNKNOWN
    message: str = ""
    last_updated: Optional[datetime] = None
