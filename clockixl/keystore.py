"""Plaintext storage of the last used Clockify API key."""
import logging
import os
from pathlib import Path
from typing import Union

from .errors import ValidationError

logger = logging.getLogger(__name__)

DEFAULT_KEY_FILE = Path.home() / ".clockixl" / "api_key.txt"


class KeyStore:
    """A single API key kept in a text file."""

    def __init__(self, path: Union[str, Path, None] = None):
        self.path = Path(path or os.getenv("CLOCKIXL_KEY_FILE") or DEFAULT_KEY_FILE).expanduser()

    def get(self) -> str:
        """Return the saved key, or an empty string if none is saved."""
        if not self.path.exists():
            return ""
        return self.path.read_text(encoding="utf-8").strip()

    def save(self, api_key: str) -> None:
        """Persist a key, replacing any saved one.

        Raises:
            ValidationError: If the key is empty
        """
        api_key = (api_key or "").strip()
        if not api_key:
            raise ValidationError("API key is required")
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(api_key, encoding="utf-8")
        logger.info("API key saved to %s", self.path)

    def delete(self) -> None:
        if self.path.exists():
            self.path.unlink()
            logger.info("API key deleted from %s", self.path)
