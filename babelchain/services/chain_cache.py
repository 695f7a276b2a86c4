"""Per-language memo of resolved chains, dropped wholesale when the store changes."""

import logging
from collections.abc import Callable

from babelchain.services.chain_resolver import ResolvedChain
from babelchain.services.language_store import LanguageStore

_log = logging.getLogger(__name__)


class ChainCache:
    def __init__(
        self,
        store: LanguageStore,
        resolver: Callable[[str], ResolvedChain],
        on_resolved: Callable[[ResolvedChain], None] | None = None,
    ):
        self._store = store
        self._resolver = resolver
        self._on_resolved = on_resolved
        self._entries: dict[str, ResolvedChain] = {}
        self.stamp = store.revision

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, language: str) -> bool:
        self._validate()
        return language in self._entries

    def _validate(self) -> None:
        if self.stamp < self._store.revision:
            if self._entries:
                _log.debug(
                    "Dropping %d cached chains (revision %d -> %d)",
                    len(self._entries),
                    self.stamp,
                    self._store.revision,
                )
            self._entries.clear()
            self.stamp = self._store.revision

    def invalidate(self) -> None:
        self._entries.clear()
        self.stamp = self._store.revision

    def get(self, language: str) -> ResolvedChain:
        self._validate()
        resolved = self._entries.get(language)
        if resolved is None:
            resolved = self._resolver(language)
            self._entries[language] = resolved
            if self._on_resolved is not None:
                self._on_resolved(resolved)
        return resolved
