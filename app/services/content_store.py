"""JSON-file backed store for all site content.

The whole site lives in one JSON document whose top-level keys are page
keys.  On load the persisted document is merged one level deep over the
default document, so a page missing from disk is backfilled while a page
present on disk is used exactly as stored.

The store is the only writer of that document.  Handlers never mutate the
in-memory copy directly; they go through :meth:`ContentStore.update_page`,
which serialises read-modify-write per page key and serialises file writes
across pages.
"""

import asyncio
import copy
import json
import logging
from collections import defaultdict
from pathlib import Path
from typing import Callable, Dict, List

from starlette.concurrency import run_in_threadpool

from app.models.content import PageContent, SiteContent, default_site_content

logger = logging.getLogger(__name__)


class ContentStore:
    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self._content: SiteContent = default_site_content()
        self._page_locks: Dict[str, asyncio.Lock] = defaultdict(asyncio.Lock)
        self._write_lock = asyncio.Lock()

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def content(self) -> SiteContent:
        """The current in-memory document.  Treat as read-only."""
        return self._content

    def page_keys(self) -> List[str]:
        return list(self._content)

    def has_page(self, key: str) -> bool:
        return key in self._content

    def get_page(self, key: str) -> PageContent:
        """Return a deep copy of page *key*.

        Raises:
            KeyError: if *key* is not a page of the current document.
        """
        return copy.deepcopy(self._content[key])

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def load(self) -> None:
        """Populate the in-memory document from disk.

        A missing file is initialised with the defaults.  A file that cannot
        be read or parsed leaves the defaults in memory and is not touched.
        """
        if not self.path.exists():
            logger.info("Content file %s not found – initialising defaults", self.path)
            self._content = default_site_content()
            self.save(self._content)
            return

        try:
            persisted = json.loads(self.path.read_text(encoding="utf-8"))
            if not isinstance(persisted, dict):
                raise ValueError(f"expected a JSON object, got {type(persisted).__name__}")
        except (OSError, ValueError):
            logger.exception("Failed to load content from %s – using defaults", self.path)
            self._content = default_site_content()
            return

        self._content = {**default_site_content(), **persisted}
        logger.info("Content loaded", extra={"path": str(self.path)})

    def save(self, content: SiteContent) -> bool:
        """Write *content* to disk and reload it.

        Returns ``True`` on success.  On failure the error is logged and the
        previous in-memory document is kept.
        """
        try:
            serialized = json.dumps(content, indent=2, ensure_ascii=False)
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(serialized, encoding="utf-8")
        except (OSError, TypeError, ValueError):
            logger.exception("Failed to save content to %s", self.path)
            return False

        logger.info("Content saved", extra={"path": str(self.path)})
        self.load()
        return True

    async def update_page(self, key: str, build: Callable[[PageContent], PageContent]) -> bool:
        """Replace page *key* with ``build(current_page)`` and persist.

        *build* receives a private copy of the current page.  Concurrent
        updates of the same page run one after another; file writes of all
        pages are serialised.

        Raises:
            KeyError: if *key* is not a page of the current document.
        """
        if not self.has_page(key):
            raise KeyError(key)

        async with self._page_locks[key]:
            new_page = build(self.get_page(key))
            async with self._write_lock:
                candidate = {**self._content, key: new_page}
                return await run_in_threadpool(self.save, candidate)
