"""Display localization of filter labels.

Labels are compared the way users see them: two labels that translate to
the same display string are the same label. The Translator maps source
strings to display strings and leaves unknown strings untouched.

Translation files are YAML:

    translations:
      Year: Année
      Country: Pays
"""

from collections.abc import Mapping
from pathlib import Path

import yaml

from global_filters.core.config import Settings, get_settings
from global_filters.core.logging import get_logger

logger = get_logger(__name__)


class TranslationLoadError(Exception):
    """Error loading a translation catalog."""

    pass


class Translator:
    """Callable source -> display string mapping."""

    def __init__(self, catalog: Mapping[str, str] | None = None):
        self._catalog = dict(catalog or {})

    def __call__(self, text: str) -> str:
        return self._catalog.get(text, text)

    def __len__(self) -> int:
        return len(self._catalog)


def load_translations(path: Path | str) -> Translator:
    """Load a Translator from a YAML catalog.

    Raises:
        TranslationLoadError: If the file is missing, not YAML, or not a mapping
    """
    path = Path(path)
    if not path.exists():
        raise TranslationLoadError(f"Translation file not found: {path}")

    try:
        with open(path, encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise TranslationLoadError(f"Invalid YAML in {path}: {e}") from e

    if not raw:
        logger.warning("empty_translation_file", path=str(path))
        return Translator()

    catalog = raw.get("translations", raw) if isinstance(raw, dict) else None
    if not isinstance(catalog, dict):
        raise TranslationLoadError(f"Expected a mapping of translations in {path}")

    translator = Translator({str(k): str(v) for k, v in catalog.items()})
    logger.info("translations_loaded", path=str(path), count=len(translator))
    return translator


def get_translator(settings: Settings | None = None) -> Translator:
    """Translator configured by ``translations_path``, identity when unset."""
    settings = settings or get_settings()
    if settings.translations_path is None:
        return Translator()
    return load_translations(settings.translations_path)
