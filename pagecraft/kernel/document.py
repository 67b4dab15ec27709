"""
Pagecraft Kernel -- Document Model

Sits between the pure pieces (generator, history, edits) and the outside
world (the persistence gateway). Owns the page being edited.

Operations: load, seed, apply_edit, undo, redo, reset, serialize_for_save,
save, close

All mutation is synchronous. load() and save() are coroutines; their
completions re-enter the model and are dropped if the session was closed in
the meantime. Edits are not blocked while a save is in flight; a SaveResult
reports which version it persisted.
"""

from __future__ import annotations

import asyncio
import copy
import logging
from dataclasses import replace
from typing import Any, Literal

from pagecraft.kernel.edits import Mutator
from pagecraft.kernel.export import build_standalone_page, clean_editor_markup
from pagecraft.kernel.gateway import AuthPending, LoadFailure, PersistenceGateway, SaveFailure
from pagecraft.kernel.generator import generate_css, generate_html
from pagecraft.kernel.history import HistoryStack
from pagecraft.kernel.types import (
    ActiveEdit,
    ComponentDescriptor,
    Document,
    HistoryEntry,
    LoadResult,
    SaveResult,
)

logger = logging.getLogger(__name__)

ModelState = Literal["idle", "loading", "ready", "auth_pending", "failed"]


class SessionNotReady(RuntimeError):
    """An edit or save was attempted before a page was loaded."""


class DocumentModel:
    """
    One page, one local writer.
    The current Document is always history.current; there is no second copy
    that could drift from it.
    """

    def __init__(self, gateway: PersistenceGateway, identifier: str):
        self._gateway = gateway
        self.identifier = identifier
        self._history: HistoryStack | None = None
        self._session = 0
        self._save_lock = asyncio.Lock()
        self.state: ModelState = "idle"
        self.last_error: str | None = None
        self.last_saved_version: int | None = None

    # -- inspection --

    @property
    def document(self) -> Document:
        return self._require_history().current.restore()

    @property
    def history(self) -> HistoryStack:
        return self._require_history()

    @property
    def version(self) -> int:
        return self._require_history().current.version

    @property
    def is_ready(self) -> bool:
        return self._history is not None

    @property
    def is_dirty(self) -> bool:
        """True when the current version differs from the last saved one."""
        return self.is_ready and self.version != self.last_saved_version

    def can_undo(self) -> bool:
        return self._history is not None and self._history.can_undo()

    def can_redo(self) -> bool:
        return self._history is not None and self._history.can_redo()

    # -- load --

    async def load(self) -> LoadResult:
        """
        Fetch the page and seed the history with it.
        AuthPending defers the load: call load() again once credentials exist.
        """
        if self._history is not None:
            return LoadResult(status="loaded", document=self.document)

        session = self._session
        self.state = "loading"
        try:
            document = await self._gateway.load(self.identifier)
        except AuthPending:
            if session != self._session:
                return LoadResult(status="superseded")
            self.state = "auth_pending"
            logger.info("document: load of %s deferred until credentials are available", self.identifier)
            return LoadResult(status="auth_pending", error="Credentials not available yet")
        except LoadFailure as e:
            if session != self._session:
                return LoadResult(status="superseded")
            self.state = "failed"
            self.last_error = str(e) or type(e).__name__
            logger.warning("document: load of %s failed: %s", self.identifier, self.last_error)
            return LoadResult(status="failed", error=self.last_error)

        if session != self._session or self._history is not None:
            logger.info("document: dropping late load result for %s", self.identifier)
            return LoadResult(status="superseded")

        self.seed(document)
        logger.info("document: loaded %s (%d components, %d sections)",
                    self.identifier, len(document.components), len(document.sections))
        return LoadResult(status="loaded", document=self.document)

    def seed(self, document: Document) -> Document:
        """Start a fresh history with `document` as snapshot 0."""
        initial = HistoryEntry.capture(self._derive(document), version=0, label="load")
        self._history = HistoryStack(initial)
        self.state = "ready"
        self.last_error = None
        self.last_saved_version = initial.version
        return initial.restore()

    # -- edit --

    def apply_edit(self, mutator: Mutator, label: str | None = None) -> Document:
        """
        Commit one edit. The mutator gets a private copy of the current
        Document and returns the new one; the result is pushed onto history.
        """
        history = self._require_history()
        updated = mutator(history.current.restore())
        if not isinstance(updated, Document):
            raise TypeError(f"Edit must return a Document, got {type(updated).__name__}")

        entry = HistoryEntry.capture(
            self._derive(updated),
            version=history.next_version(),
            label=label or getattr(mutator, "__qualname__", "edit").split(".")[0],
        )
        history.push(entry)
        return entry.restore()

    def undo(self) -> Document | None:
        entry = self._require_history().undo()
        return entry.restore() if entry is not None else None

    def redo(self) -> Document | None:
        entry = self._require_history().redo()
        return entry.restore() if entry is not None else None

    def reset(self) -> Document:
        """Discard every edit and return to the loaded page."""
        return self._require_history().reset().restore()

    # -- save --

    def serialize_for_save(self, active_edit: ActiveEdit | None = None) -> dict[str, Any]:
        """
        Reconcile the current Document and the active edit into one payload.

        Field by field, a value supplied by the active edit wins over the
        Document's. Then html follows the declared source of truth:
          - supplied html makes markup canonical (htmlMode "manual")
          - in "generated" mode html is rebuilt from components + sections
          - blank html is rebuilt too; blank css gets the base stylesheet
        """
        doc = self.document
        edit = active_edit or ActiveEdit()

        components = doc.components if edit.components is None else _as_components(edit.components)
        sections = doc.sections if edit.sections is None else copy.deepcopy(edit.sections)
        css = doc.css if edit.css is None else edit.css

        if edit.html is not None:
            html, mode = edit.html, "manual"
        else:
            html, mode = doc.html, doc.html_mode

        if mode == "generated" or not html.strip():
            html, mode = generate_html(components, sections), "generated"
        if not css.strip():
            css = generate_css()

        merged = Document(
            components=components,
            sections=sections,
            html=clean_editor_markup(html),
            css=css,
            html_mode=mode,
            extra=doc.extra,
        )
        return merged.to_dict()

    async def save(self, active_edit: ActiveEdit | None = None) -> SaveResult:
        """
        Persist the reconciled page. Never touches the Document or history;
        on failure the caller gets the error and may retry.
        """
        session = self._session
        payload = self.serialize_for_save(active_edit)
        version = self.version

        async with self._save_lock:
            if session != self._session:
                return SaveResult(ok=False, version=version, error="Session closed", superseded=True)
            try:
                await self._gateway.save(self.identifier, payload)
            except SaveFailure as e:
                superseded = session != self._session
                if not superseded:
                    logger.warning("document: save of %s (version %d) failed: %s", self.identifier, version, e)
                return SaveResult(
                    ok=False,
                    version=version,
                    error=str(e) or type(e).__name__,
                    status_code=e.status_code,
                    superseded=superseded,
                )

        if session != self._session:
            return SaveResult(ok=True, version=version, superseded=True)

        if self.last_saved_version is None or version > self.last_saved_version:
            self.last_saved_version = version
        logger.info("document: saved %s as of version %d", self.identifier, version)
        return SaveResult(ok=True, version=version)

    # -- lifecycle --

    def close(self) -> None:
        """End the session. Unsaved edits are discarded; late responses are ignored."""
        self._session += 1
        self._history = None
        self.state = "idle"

    def preview_html(self, title: str = "Landing Page Preview") -> str:
        """Standalone document of the current page, for the "view page" action."""
        doc = self.document
        return build_standalone_page(doc.html, doc.css, title=title)

    # -- internals --

    def _require_history(self) -> HistoryStack:
        if self._history is None:
            raise SessionNotReady(f"Page {self.identifier} is not loaded (state: {self.state})")
        return self._history

    @staticmethod
    def _derive(document: Document) -> Document:
        """Re-derive html when components are the declared source of truth."""
        if document.html_mode == "generated":
            return replace(document, html=generate_html(document.components, document.sections))
        return document


def _as_components(items: list[ComponentDescriptor | dict[str, Any]]) -> list[ComponentDescriptor]:
    return [
        copy.deepcopy(c) if isinstance(c, ComponentDescriptor) else ComponentDescriptor.from_dict(c)
        for c in items
    ]
