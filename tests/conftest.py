import pytest

from babelchain import i18n
from babelchain.config import Settings
from babelchain.services.translator import Translator


@pytest.fixture
def test_settings(tmp_path):
    return Settings(
        _env_file=None,
        base_override_key="_base",
        global_base="en-us",
        path_format=str(tmp_path / "locales" / "{0}.json"),
    )


@pytest.fixture
def translator(test_settings):
    """Translator with en-us as global base and nothing loaded."""
    return Translator(test_settings)


@pytest.fixture
def events(translator):
    """Record every event the translator emits as (name, kwargs) tuples."""
    seen = []
    for name in ("missing_key", "missing_language", "change"):
        translator.on(name, lambda _name=name, **kw: seen.append((_name, kw)))
    return seen


@pytest.fixture(autouse=True)
def _reset_shared_translator():
    i18n.reset()
    yield
    i18n.reset()
