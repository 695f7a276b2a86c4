"""Shared translator instance with directory loading and plugin registration."""

import logging
from pathlib import Path
from typing import Any

from babelchain.services.translator import Translator

_log = logging.getLogger(__name__)

_default: Translator | None = None


def get_translator() -> Translator:
    """Return the shared translator, creating it from settings on first use."""
    global _default
    if _default is None:
        _default = Translator()
    return _default


def reset() -> None:
    """Discard the shared translator. Useful for testing."""
    global _default
    _default = None


async def load_all(directory: str | Path) -> list[str]:
    """Load every ``*.json`` file in ``directory``; the file stem is the language id."""
    translator = get_translator()
    loaded = []
    for path in sorted(Path(directory).glob("*.json")):
        loaded.append(await translator.load_language(path.stem, path))
    _log.info("Loaded %d languages from %s", len(loaded), directory)
    return loaded


def register_translations(translations: dict[str, dict[str, Any]]) -> None:
    """Merge extra translations from a plugin into the shared translator.

    ``translations`` maps language ids to key→value dicts.  Only languages
    already loaded are updated; existing keys are overwritten.
    """
    translator = get_translator()
    for language, keys in translations.items():
        if not translator.has_language(language):
            _log.debug("Skipping translations for unloaded language '%s'", language)
            continue
        for key, value in keys.items():
            translator.set_key(language, key, value)


def t(key: str, language: str) -> Any:
    """Translate ``key`` into ``language`` with the shared translator."""
    return get_translator().translate(key, language)
