"""Fallback chain resolution: breadth-first, cycle-safe walk over base overrides."""

import enum
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from babelchain.services.language_store import LanguageStore

_log = logging.getLogger(__name__)


class OverrideKind(enum.Enum):
    ABSENT = "absent"
    SINGLE = "single"
    LIST = "list"


@dataclass(frozen=True)
class BaseOverride:
    kind: OverrideKind
    languages: tuple[str, ...] = ()

    @classmethod
    def from_value(cls, value: Any, owner: str = "") -> "BaseOverride":
        """Normalize a raw override value read from a language table.

        A string becomes SINGLE, a list or tuple becomes LIST (non-string
        entries dropped), anything else is ABSENT.
        """
        if isinstance(value, str):
            value = value.strip().lower()
            if not value:
                return cls(OverrideKind.ABSENT)
            return cls(OverrideKind.SINGLE, (value,))
        if isinstance(value, (list, tuple)):
            languages = []
            for item in value:
                if isinstance(item, str) and item.strip():
                    languages.append(item.strip().lower())
                else:
                    _log.warning("Ignoring base override entry %r in language '%s'", item, owner)
            return cls(OverrideKind.LIST, tuple(languages))
        if value is not None:
            _log.warning(
                "Ignoring base override of type %s in language '%s'", type(value).__name__, owner
            )
        return cls(OverrideKind.ABSENT)


@dataclass(frozen=True)
class ResolvedChain:
    languages: tuple[str, ...]
    missing: frozenset[str] = field(default_factory=frozenset)

    def __iter__(self):
        return iter(self.languages)

    def __len__(self) -> int:
        return len(self.languages)

    def __getitem__(self, index):
        return self.languages[index]


def normalize_global_base(value: str | Iterable[str] | None) -> tuple[str, ...]:
    """Turn a configured global base (one id or several) into a tuple of ids."""
    if value is None:
        return ()
    override = BaseOverride.from_value(list(value) if not isinstance(value, str) else value)
    return override.languages


def _extend(
    chain: list[str],
    seen: set[str],
    candidates: tuple[str, ...],
    store: LanguageStore,
    missing: set[str],
) -> None:
    for candidate in candidates:
        if candidate in seen:
            continue
        chain.append(candidate)
        seen.add(candidate)
        if candidate not in store:
            missing.add(candidate)


def resolve(
    requested: str,
    store: LanguageStore,
    base_override_key: str,
    global_base: tuple[str, ...],
) -> ResolvedChain:
    """Compute the probe order for ``requested``.

    ``requested`` must already be normalized. The chain grows as a work-list:
    every node's declared bases are appended in order before any of their own
    bases. Unloaded languages are kept in the chain (and reported in
    ``missing``) but never expanded. Whenever the work-list is about to run
    dry the global base is appended, so every chain ends in the global
    default.
    """
    chain = [requested]
    seen = {requested}
    missing: set[str] = set()

    pos = 0
    while pos < len(chain):
        language = chain[pos]
        if language not in store:
            missing.add(language)
        else:
            table = store.get(language)
            override = BaseOverride.from_value(table.get(base_override_key), language)
            if override.kind is not OverrideKind.ABSENT:
                _extend(chain, seen, override.languages, store, missing)

        if pos == len(chain) - 1:
            _extend(chain, seen, global_base, store, missing)
        pos += 1

    _log.debug("Resolved chain for '%s': %s (missing: %s)", requested, chain, sorted(missing))
    return ResolvedChain(tuple(chain), frozenset(missing))
