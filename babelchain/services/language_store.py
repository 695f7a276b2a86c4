"""Language store: language id to key/value table, with a revision counter."""

import logging
from collections.abc import Mapping
from typing import Any

from babelchain.errors import InvalidArgument, UnknownKey, UnknownLanguage

_log = logging.getLogger(__name__)


def normalize_language(language: str) -> str:
    """Return the canonical (stripped, lowercase) form of a language id."""
    if not isinstance(language, str):
        raise InvalidArgument(f"language must be a string, got {type(language).__name__}")
    normalized = language.strip().lower()
    if not normalized:
        raise InvalidArgument("language cannot be empty")
    return normalized


def _check_key(key: str) -> None:
    if not isinstance(key, str):
        raise InvalidArgument(f"key must be a string, got {type(key).__name__}")


def _freeze_override(value: Any) -> Any:
    # overrides are immutable once stored; only set/clear can change them
    if isinstance(value, list):
        return tuple(value)
    return value


class LanguageStore:
    """In-memory collection of languages.

    ``revision`` is bumped on every change that can alter a fallback chain:
    creating, replacing or destroying a language, and setting or clearing the
    base-override key inside one.
    """

    def __init__(self, base_override_key: str = "_base"):
        _check_key(base_override_key)
        self._base_override_key = base_override_key
        self._languages: dict[str, dict[str, Any]] = {}
        self.revision = 0

    @property
    def base_override_key(self) -> str:
        return self._base_override_key

    def touch(self) -> int:
        self.revision += 1
        return self.revision

    def __contains__(self, language: str) -> bool:
        return isinstance(language, str) and language in self._languages

    def __len__(self) -> int:
        return len(self._languages)

    def has(self, language: str) -> bool:
        return normalize_language(language) in self._languages

    def ids(self) -> list[str]:
        return list(self._languages)

    def create(self, language: str) -> str:
        language = normalize_language(language)
        if language in self._languages:
            _log.debug("Replacing language '%s' with an empty table", language)
        self._languages[language] = {}
        self.touch()
        return language

    def put(self, language: str, table: Mapping[str, Any]) -> str:
        language = normalize_language(language)
        if not isinstance(table, Mapping):
            raise InvalidArgument(f"language table must be a mapping, got {type(table).__name__}")
        for key in table:
            _check_key(key)
        table = dict(table)
        if self._base_override_key in table:
            table[self._base_override_key] = _freeze_override(table[self._base_override_key])
        self._languages[language] = table
        self.touch()
        return language

    def destroy(self, language: str) -> None:
        language = normalize_language(language)
        if language not in self._languages:
            raise UnknownLanguage(language)
        del self._languages[language]
        self.touch()

    def get(self, language: str) -> dict[str, Any]:
        language = normalize_language(language)
        try:
            return self._languages[language]
        except KeyError:
            raise UnknownLanguage(language) from None

    def lookup(self, language: str, key: str) -> tuple[bool, Any]:
        """Probe an already-normalized language without raising.

        Returns ``(found, value)``; unloaded languages count as not found.
        """
        table = self._languages.get(language)
        if table is None or key not in table:
            return False, None
        return True, table[key]

    def get_value(self, language: str, key: str) -> Any:
        _check_key(key)
        table = self.get(language)
        if key not in table:
            raise UnknownKey(normalize_language(language), key)
        return table[key]

    def set_value(self, language: str, key: str, value: Any, force: bool = True) -> bool:
        """Set ``key`` to ``value``.

        With ``force=False`` an existing key is left untouched and False is
        returned.
        """
        _check_key(key)
        table = self.get(language)
        if not force and key in table:
            return False
        if key == self._base_override_key:
            table[key] = _freeze_override(value)
            self.touch()
        else:
            table[key] = value
        return True

    def clear_value(self, language: str, key: str) -> bool:
        _check_key(key)
        table = self.get(language)
        if key not in table:
            return False
        del table[key]
        if key == self._base_override_key:
            self.touch()
        return True
