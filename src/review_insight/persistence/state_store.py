"""
Local key-value state for the logging endpoint URL and the user id.

Stored as a small JSON object on disk. Values never expire; a missing or
unreadable file behaves like an empty store.
"""

import json
import uuid
from pathlib import Path
from typing import Optional, Union

import structlog
from pydantic import AnyHttpUrl, TypeAdapter, ValidationError

logger = structlog.get_logger(__name__)

_URL_ADAPTER = TypeAdapter(AnyHttpUrl)


class InvalidEndpointURL(ValueError):
    """Raised when a logging endpoint URL is blank or not an http(s) URL."""


class LocalStateStore:
    """
    JSON-file backed string store.

    Keys:
    - ENDPOINT_URL_KEY: saved logging endpoint (Apps Script /exec URL)
    - USER_ID_KEY: generated pseudo-anonymous user id
    """

    ENDPOINT_URL_KEY = "endpoint_url"
    USER_ID_KEY = "user_id"

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def _read(self) -> dict[str, str]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("State file unreadable, starting empty", path=str(self.path), error=str(e))
            return {}
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("State file is not valid JSON, starting empty", path=str(self.path))
            return {}
        if not isinstance(data, dict):
            return {}
        return {str(k): str(v) for k, v in data.items()}

    def _write(self, data: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp.write_text(json.dumps(data, indent=2, sort_keys=True), encoding="utf-8")
        tmp.replace(self.path)

    def get(self, key: str) -> Optional[str]:
        return self._read().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self._write(data)
        logger.debug("State key saved", key=key, path=str(self.path))

    def get_or_create_user_id(self) -> str:
        """Return the stored user id, generating and saving one on first use."""
        uid = (self.get(self.USER_ID_KEY) or "").strip()
        if not uid:
            uid = uuid.uuid4().hex
            self.set(self.USER_ID_KEY, uid)
            logger.info("Generated new user id")
        return uid

    def get_endpoint_url(self) -> str:
        """Saved logging endpoint URL, or an empty string."""
        return (self.get(self.ENDPOINT_URL_KEY) or "").strip()

    def save_endpoint_url(self, url: str) -> str:
        """
        Validate and persist the logging endpoint URL.

        Raises:
            InvalidEndpointURL: blank input or not an http(s) URL
        """
        url = (url or "").strip()
        if not url:
            raise InvalidEndpointURL(
                "Please paste your Apps Script Web App URL (ending with /exec)."
            )
        try:
            _URL_ADAPTER.validate_python(url)
        except ValidationError:
            raise InvalidEndpointURL("Invalid URL format.")

        self.set(self.ENDPOINT_URL_KEY, url)
        logger.info("Saved logging endpoint URL", url=url)
        return url
