import tempfile
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, field_validator

from paperscrape.logging import get_logger

logger = get_logger(__name__)


class PreferenceStore(BaseModel):
    """Read-only snapshot of the application preferences the scrapers consult."""

    app_lib_folder: str = str(Path.home() / "Documents" / "paperlib")
    download_folder: str = str(Path(tempfile.gettempdir()) / "paperscrape")

    pdf_builtin_scraper: bool = True
    arxiv_scraper: bool = True
    googlescholar_scraper: bool = True
    ieee_scraper: bool = True
    ieee_api_key: str = ""

    httpproxy: str = ""
    httpsproxy: str = ""
    http_timeout: int = 30

    debug: bool = False

    model_config = ConfigDict(extra="forbid")

    @field_validator("http_timeout")
    @classmethod
    def check_timeout(cls, v):
        if v <= 0:
            raise ValueError(f"http_timeout must be positive, got {v}")
        return v

    @field_validator("app_lib_folder", "download_folder")
    @classmethod
    def expand_folder(cls, v):
        return str(Path(v).expanduser())


class Preference:
    """Key/value view over a `PreferenceStore`.

    Scrapers only ever call `get`; `set` exists for the host application
    and for tests.
    """

    def __init__(self, store: Optional[PreferenceStore] = None, **overrides: Any):
        store = store or PreferenceStore()
        if overrides:
            store = PreferenceStore(**{**store.model_dump(), **overrides})
        self.store = store

    def get(self, key: str) -> Any:
        if key not in PreferenceStore.model_fields:
            raise KeyError(f"Unknown preference: {key}")
        return getattr(self.store, key)

    def set(self, key: str, value: Any) -> None:
        if key not in PreferenceStore.model_fields:
            raise KeyError(f"Unknown preference: {key}")
        self.store = PreferenceStore(**{**self.store.model_dump(), key: value})

    def proxy_for(self, url: str) -> Optional[str]:
        """Proxy to use for `url`, or None to connect directly."""
        proxy = self.get("httpsproxy") if url.startswith("https") else self.get("httpproxy")
        return proxy or None


def load_preference(path: Union[str, Path]) -> Preference:
    with open(path) as f:
        raw = yaml.safe_load(f) or {}
    logger.debug(f"Loaded preferences from {path}")
    return Preference(PreferenceStore(**raw.get("preference", {})))  # unpack
