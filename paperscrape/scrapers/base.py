"""
Scraper contract for sources that are located by the draft itself.

A scraper is any value with the three-phase interface below; the
`ScraperRepository` only relies on `Scraper`, never on `BaseScraper`.

1. `preprocess(draft)`: the gate. Decides from static preconditions whether
   the scraper applies and where to fetch from. No I/O beyond existence
   checks.
2. `fetch(request)`: the I/O. Refuses to run on a disabled request.
3. `parsing_process(raw, draft)`: pure transformation of the raw response
   into fields on the draft.

`BaseScraper.scrape` strings the three together and turns a disabled gate
into a no-op.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Protocol, runtime_checkable

from paperscrape.config import Preference
from paperscrape.errors import ScraperDisabledError
from paperscrape.logging import get_logger
from paperscrape.model.draft import PaperEntityDraft


@dataclass(frozen=True)
class ScraperRequest:
    scrape_url: str
    headers: Dict[str, str] = field(default_factory=dict)
    enable: bool = False


@runtime_checkable
class Scraper(Protocol):
    def preprocess(self, entity_draft: PaperEntityDraft) -> ScraperRequest: ...

    async def fetch(self, request: ScraperRequest) -> Any: ...

    def parsing_process(self, raw_response: Any, entity_draft: PaperEntityDraft) -> PaperEntityDraft: ...

    async def scrape(self, entity_draft: PaperEntityDraft) -> PaperEntityDraft: ...


class BaseScraper(ABC):
    """Shared plumbing for scrapers: preference access, logging and `scrape`."""

    def __init__(self, preference: Preference):
        self.preference = preference
        self.logger = get_logger(self.__class__.__name__)

    @property
    def name(self) -> str:
        return self.__class__.__name__

    @abstractmethod
    def preprocess(self, entity_draft: PaperEntityDraft) -> ScraperRequest:
        pass

    @abstractmethod
    async def fetch(self, request: ScraperRequest) -> Any:
        pass

    @abstractmethod
    def parsing_process(self, raw_response: Any, entity_draft: PaperEntityDraft) -> PaperEntityDraft:
        pass

    def ensure_enabled(self, request: ScraperRequest) -> None:
        """Raise if `fetch` is reached through a disabled gate."""
        if not request.enable:
            raise ScraperDisabledError(self.name, request.scrape_url)

    async def scrape(self, entity_draft: PaperEntityDraft) -> PaperEntityDraft:
        request = self.preprocess(entity_draft)
        if not request.enable:
            self.logger.debug(f"{self.name} gated out for {entity_draft}")
            return entity_draft

        raw_response = await self.fetch(request)
        return self.parsing_process(raw_response, entity_draft)
