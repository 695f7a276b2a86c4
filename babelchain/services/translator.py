"""Translator: public entry point tying the store, chain cache and events together."""

import logging
import threading
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any

from babelchain import hooks
from babelchain.config import Settings
from babelchain.errors import InvalidArgument
from babelchain.services import bulk_apply, codec
from babelchain.services.chain_cache import ChainCache
from babelchain.services.chain_resolver import (
    ResolvedChain,
    normalize_global_base,
    resolve,
)
from babelchain.services.language_store import LanguageStore, normalize_language

_log = logging.getLogger(__name__)


class Translator:
    def __init__(
        self,
        settings: Settings | None = None,
        *,
        base_override_key: str | None = None,
        global_base: str | Iterable[str] | None = None,
        path_format: str | None = None,
        notifier: hooks.Notifier | None = None,
    ):
        if settings is None:
            from babelchain.config import settings as default_settings

            settings = default_settings

        self._store = LanguageStore(base_override_key or settings.base_override_key)
        self._global_base = normalize_global_base(
            settings.global_base if global_base is None else global_base
        )
        self._path_format = path_format or settings.path_format
        self._encoding = settings.encoding
        self._attribute = settings.translate_attribute
        self._notifier = notifier or hooks.Notifier()
        self._lock = threading.RLock()
        self._cache = ChainCache(self._store, self._resolve, self._report_missing)
        _log.debug(
            "Translator ready (override key '%s', global base %s)",
            self._store.base_override_key,
            self._global_base,
        )

    # -- chain -----------------------------------------------------------

    def _resolve(self, language: str) -> ResolvedChain:
        return resolve(language, self._store, self._store.base_override_key, self._global_base)

    def _report_missing(self, resolved: ResolvedChain) -> None:
        for language in sorted(resolved.missing):
            self._notifier.emit(hooks.MISSING_LANGUAGE, language=language)

    def get_chain(self, language: str) -> tuple[str, ...]:
        language = normalize_language(language)
        with self._lock:
            return self._cache.get(language).languages

    @property
    def base_override_key(self) -> str:
        return self._store.base_override_key

    @property
    def global_base(self) -> tuple[str, ...]:
        return self._global_base

    def set_global_base(self, value: str | Iterable[str] | None) -> None:
        with self._lock:
            self._global_base = normalize_global_base(value)
            self._store.touch()
        self._changed()

    # -- events ----------------------------------------------------------

    @property
    def notifier(self) -> hooks.Notifier:
        return self._notifier

    def on(self, event: str, handler: Callable) -> hooks.Subscription:
        return self._notifier.on(event, handler)

    def off(self, subscription: hooks.Subscription) -> bool:
        return self._notifier.off(subscription)

    def _changed(self) -> None:
        self._notifier.emit(hooks.CHANGE)

    # -- translation -----------------------------------------------------

    def translate(self, key: str, language: str) -> Any:
        """Translate ``key`` into ``language``, walking its fallback chain.

        Returns the first value found, or ``key`` itself if no language in
        the chain defines it.
        """
        language = normalize_language(language)
        if not isinstance(key, str):
            raise InvalidArgument(f"key must be a string, got {type(key).__name__}")

        with self._lock:
            chain = self._cache.get(language)
            misses = []
            for candidate in chain:
                if candidate not in self._store:
                    continue
                found, value = self._store.lookup(candidate, key)
                if found:
                    break
                misses.append(candidate)
            else:
                found, value = False, key

        for candidate in misses:
            self._notifier.emit(hooks.MISSING_KEY, key=key, language=candidate)
        if not found:
            _log.debug("No translation for '%s' in chain %s", key, chain.languages)
        return value

    # -- languages -------------------------------------------------------

    def has_language(self, language: str) -> bool:
        with self._lock:
            return self._store.has(language)

    def languages(self) -> list[str]:
        with self._lock:
            return self._store.ids()

    def create_language(self, language: str) -> str:
        with self._lock:
            language = self._store.create(language)
        self._changed()
        return language

    def destroy_language(self, language: str) -> None:
        with self._lock:
            self._store.destroy(language)
        _log.info("Destroyed language '%s'", normalize_language(language))
        self._changed()

    def get_key(self, language: str, key: str) -> Any:
        with self._lock:
            return self._store.get_value(language, key)

    def set_key(self, language: str, key: str, value: Any, force: bool = True) -> bool:
        with self._lock:
            changed = self._store.set_value(language, key, value, force)
        if changed:
            self._changed()
        return changed

    def clear_key(self, language: str, key: str) -> bool:
        with self._lock:
            changed = self._store.clear_value(language, key)
        if changed:
            self._changed()
        return changed

    # -- ingestion / serialization --------------------------------------

    async def load_language(
        self, language: str, source, encoding: str | None = None, make_base: bool = False
    ) -> str:
        """Decode ``source`` and install it as ``language``, replacing any existing table."""
        language = normalize_language(language)
        table = await codec.decode_async(source, encoding or self._encoding)
        with self._lock:
            self._store.put(language, table)
            if make_base:
                self._global_base = (language,)
                self._store.touch()
        _log.info("Loaded language '%s' (%d keys)", language, len(table))
        self._changed()
        return language

    def path_for(self, language: str) -> str:
        return self._path_format.replace("{0}", normalize_language(language))

    async def load(self, language: str, make_base: bool = False, reload: bool = False) -> bool:
        """Load ``language`` from the configured path format.

        A language that is already loaded is kept as is unless ``reload``.
        """
        language = normalize_language(language)
        with self._lock:
            loaded = language in self._store
        if loaded and not reload:
            _log.debug("Language '%s' already loaded", language)
            if make_base and self._global_base != (language,):
                self.set_global_base(language)
            return True
        path = self.path_for(language)
        _log.debug("Loading language '%s' from '%s'", language, path)
        await self.load_language(language, Path(path), make_base=make_base)
        return True

    async def save_language(self, language: str, indent: int | None = 4) -> str:
        """Serialize ``language`` to JSON text."""
        with self._lock:
            table = dict(self._store.get(language))
        return codec.encode(table, indent=indent)

    # -- bulk apply ------------------------------------------------------

    def _default_resolver(self, language: str, key: str, node: Any) -> Any:
        return self.translate(key, language)

    async def auto_translate(
        self,
        language: str,
        root: Any,
        attribute: str | None = None,
        resolver: bulk_apply.Resolver | None = None,
        applier: bulk_apply.Applier | None = None,
    ) -> int:
        """Translate every node under ``root`` that carries ``attribute``."""
        language = normalize_language(language)
        attribute = attribute or self._attribute
        count = await bulk_apply.apply_tree(
            language,
            root,
            attribute,
            resolver or self._default_resolver,
            applier or bulk_apply.assign_text,
        )
        _log.info("Translated %d nodes to language '%s'", count, language)
        return count
