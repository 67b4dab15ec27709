"""
Pagecraft Kernel -- the document/history engine.

Components:
  generator  -- components (+ sections) -> markup  (pure, deterministic)
  reorder    -- remove-then-insert list moves  (pure)
  history    -- linear undo/redo over immutable snapshots
  edits      -- Document -> Document mutators
  document   -- DocumentModel: owns the page, commits edits, load/save
  gateway    -- persistence contract + in-memory implementation
  export     -- standalone "view page" document
"""

from pagecraft.kernel.document import DocumentModel, SessionNotReady
from pagecraft.kernel.gateway import (
    AuthPending,
    GatewayError,
    LoadFailure,
    MemoryGateway,
    NotFound,
    PersistenceGateway,
    SaveFailure,
)
from pagecraft.kernel.generator import generate_css, generate_html
from pagecraft.kernel.history import HistoryStack
from pagecraft.kernel.reorder import reorder
from pagecraft.kernel.types import (
    ActiveEdit,
    ComponentDescriptor,
    Document,
    HistoryEntry,
    LoadResult,
    SaveResult,
)

__all__ = [
    "DocumentModel",
    "SessionNotReady",
    "HistoryStack",
    "reorder",
    "generate_html",
    "generate_css",
    "PersistenceGateway",
    "MemoryGateway",
    "GatewayError",
    "LoadFailure",
    "NotFound",
    "AuthPending",
    "SaveFailure",
    "ActiveEdit",
    "ComponentDescriptor",
    "Document",
    "HistoryEntry",
    "LoadResult",
    "SaveResult",
]
