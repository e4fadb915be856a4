"""
Web importer contract.

A web importer receives a page the host application has already fetched
(`WebContent`) and either recognises it, returning a filled draft, or
returns None. Gate, fetch and parse collapse into the single
`parse(web_content)` call because the source is already in hand; importers
that need more data (an API record, the PDF itself) fetch it inside that
call.
"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, Pattern, Protocol, runtime_checkable

from paperscrape.common import http_utils
from paperscrape.config import Preference
from paperscrape.logging import get_logger
from paperscrape.model.draft import PaperEntityDraft


@dataclass
class WebContent:
    """A page as captured by the host application."""

    url: str
    document: str = ""
    cookies: str = ""


@runtime_checkable
class WebImporter(Protocol):
    async def parse(self, web_content: WebContent) -> Optional[PaperEntityDraft]: ...


class BaseWebImporter(ABC):
    """
    Shared plumbing for web importers.

    Subclasses set `url_regexp` and, when the importer can be switched off,
    `preference_key`; then implement `parsing_process`.
    """

    url_regexp: Optional[Pattern[str]] = None
    preference_key: Optional[str] = None

    def __init__(self, preference: Preference):
        self.preference = preference
        self.logger = get_logger(self.__class__.__name__)

    @property
    def name(self) -> str:
        return self.__class__.__name__

    def preprocess(self, web_content: WebContent) -> bool:
        """Gate: the importer is switched on and recognises the page URL."""
        if self.preference_key and not self.preference.get(self.preference_key):
            return False
        if self.url_regexp is None:
            return True
        return bool(self.url_regexp.search(web_content.url))

    @abstractmethod
    async def parsing_process(self, web_content: WebContent) -> Optional[PaperEntityDraft]:
        """Turn a recognised page into a draft, or None if nothing usable is on it."""
        pass

    async def parse(self, web_content: WebContent) -> Optional[PaperEntityDraft]:
        if not self.preprocess(web_content):
            self.logger.debug(f"{self.name} does not handle {web_content.url}")
            return None
        return await self.parsing_process(web_content)

    def _http_options(self, url: str) -> Dict[str, object]:
        return {
            "timeout": self.preference.get("http_timeout"),
            "proxy": self.preference.proxy_for(url),
        }

    async def _download_pdf(self, url: str, filename: str, headers: Optional[Dict[str, str]] = None) -> str:
        """
        Download a PDF into the download folder.

        Args:
            url: PDF URL
            filename: Target file name, sanitised before use
            headers: Extra request headers (cookies for paywalled sites)

        Returns:
            Local path of the downloaded file
        """
        safe_name = re.sub(r"[^\w.\-]+", "_", filename).strip("_") or "paper"
        if not safe_name.lower().endswith(".pdf"):
            safe_name += ".pdf"
        destination = Path(self.preference.get("download_folder")) / safe_name

        await http_utils.download_file(url, destination, headers=headers, **self._http_options(url))
        return str(destination)
