from types import MappingProxyType
from typing import Mapping, Optional

from paperscrape.config import Preference
from paperscrape.logging import get_logger
from paperscrape.model.draft import PaperEntityDraft
from paperscrape.scrapers.base import Scraper
from paperscrape.scrapers.pdf import PDFScraper


class ScraperRepository:
    """
    Ordered chain of scrapers for drafts that point at a local source.

    Each scraper is gated on the draft; the first one that is gated in and
    leaves a non-empty draft ends the chain. Errors raised by a scraper are
    not caught here: there is nothing to fall back to.
    """

    def __init__(self, preference: Preference, scrapers: Optional[Mapping[str, Scraper]] = None):
        self.preference = preference
        self.logger = get_logger(self.__class__.__name__)

        if scrapers is None:
            scrapers = {
                "pdf": PDFScraper(self.preference),
            }
        self.scraper_list: Mapping[str, Scraper] = MappingProxyType(dict(scrapers))

    async def scrape(self, entity_draft: PaperEntityDraft) -> PaperEntityDraft:
        for name, scraper in self.scraper_list.items():
            request = scraper.preprocess(entity_draft)
            if not request.enable:
                self.logger.debug(f"Scraper {name} skipped for {entity_draft}")
                continue

            raw_response = await scraper.fetch(request)
            entity_draft = scraper.parsing_process(raw_response, entity_draft)
            if not entity_draft.is_empty():
                self.logger.info(f"Scraper {name} produced {entity_draft}")
                break
        return entity_draft
