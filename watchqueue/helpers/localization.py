"""Localization system."""

import json
import logging
from pathlib import Path
from typing import Dict

logger = logging.getLogger(__name__)

LOCALES_DIR = Path(__file__).resolve().parent.parent / "locales"


class Localization:
    """Loads chat texts from locales/<lang>.json with English fallback."""

    def __init__(self, locales_dir: Path = LOCALES_DIR, language: str = "en"):
        self.locales_dir = locales_dir
        self.translations: Dict[str, Dict[str, str]] = {}
        self.default_language = "en"
        self.language = language
        self._load_translations()

    def _load_translations(self):
        """Load all translation files."""
        for file_path in sorted(self.locales_dir.glob("*.json")):
            lang_code = file_path.stem
            try:
                with open(file_path, "r", encoding="utf-8") as f:
                    self.translations[lang_code] = json.load(f)
                logger.debug(f"Loaded language: {lang_code}")
            except (OSError, ValueError) as e:
                logger.error(f"Failed to load {lang_code}: {e}")

    def set_language(self, language: str) -> bool:
        """Switch the active language if a locale file exists for it."""
        if language in self.translations:
            self.language = language
            return True
        logger.warning(f"No locale for {language!r}, keeping {self.language!r}")
        return False

    def get_text(self, key: str, **kwargs) -> str:
        """Get translated text for key."""
        text = self.translations.get(self.language, {}).get(key)

        # Fallback to English
        if not text:
            text = self.translations.get(self.default_language, {}).get(key, key)

        try:
            return text.format(**kwargs) if kwargs else text
        except (KeyError, IndexError) as e:
            logger.error(f"Bad placeholder in text {key!r}: {e}")
            return text


# Global instance
localization = Localization()


def get_text(key: str, **kwargs) -> str:
    """Quick access to get_text."""
    return localization.get_text(key, **kwargs)


def set_language(language: str) -> bool:
    return localization.set_language(language)
