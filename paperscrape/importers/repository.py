from types import MappingProxyType
from typing import Mapping, Optional

from paperscrape.config import Preference
from paperscrape.errors import ContractViolationError
from paperscrape.importers.arxiv import ArXivWebImporter
from paperscrape.importers.base import WebContent, WebImporter
from paperscrape.importers.embed import EmbedWebImporter
from paperscrape.importers.google_scholar import GoogleScholarWebImporter
from paperscrape.importers.ieee import IEEEWebImporter
from paperscrape.logging import get_logger
from paperscrape.model.draft import PaperEntityDraft
from paperscrape.state import StatusChannel

ALERT_KEY = "viewState.alertInformation"


class WebImporterRepository:
    """
    Ordered chain of web importers with first-match-wins semantics.

    Importers are tried strictly in registration order. An importer that
    raises is reported on the status channel and skipped; the first one
    to return a draft ends the chain. When none does, the result is None.
    """

    def __init__(
        self,
        shared_state: StatusChannel,
        preference: Preference,
        importers: Optional[Mapping[str, WebImporter]] = None,
    ):
        self.shared_state = shared_state
        self.preference = preference
        self.logger = get_logger(self.__class__.__name__)

        if importers is None:
            importers = {
                "arxiv": ArXivWebImporter(self.preference),
                "googlescholar": GoogleScholarWebImporter(self.preference),
                "ieee": IEEEWebImporter(self.preference),
                "embed": EmbedWebImporter(self.preference),
            }
        self.importer_list: Mapping[str, WebImporter] = MappingProxyType(dict(importers))

    async def parse(self, web_content: WebContent) -> Optional[PaperEntityDraft]:
        for name, importer in self.importer_list.items():
            try:
                parsed = await importer.parse(web_content)
            except ContractViolationError:
                raise
            except Exception as e:
                self.logger.error(f"Web importer {name} failed on {web_content.url}: {e}")
                self.shared_state.set(ALERT_KEY, f"Web importer {name} error: {e}")
                continue

            if parsed is not None:
                self.logger.info(f"Web importer {name} matched {web_content.url}")
                return parsed

        self.logger.info(f"No web importer matched {web_content.url}")
        return None
