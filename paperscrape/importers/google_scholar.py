from typing import Dict, Optional

import aiohttp

from paperscrape.common.regex_patterns import (
    SCHOLAR_CITATION_URL_PATTERN,
    SCHOLAR_FIELD_PATTERN,
    SCHOLAR_PDF_LINK_PATTERN,
    SCHOLAR_TITLE_PATTERN,
    extract_year,
    strip_html,
)
from paperscrape.errors import HttpRequestError
from paperscrape.importers.base import BaseWebImporter, WebContent
from paperscrape.model.draft import PaperEntityDraft

# venue field label -> pub_type
VENUE_FIELDS = {
    "journal": 0,
    "conference": 1,
    "book": 3,
    "source": 2,
}


class GoogleScholarWebImporter(BaseWebImporter):
    """
    Google Scholar "view citation" pages.

    The page lists the paper as label/value rows (Authors, Publication date,
    Journal, Conference, ...) under the title; the optional `[PDF]` link
    next to the title is downloaded when it works.
    """

    url_regexp = SCHOLAR_CITATION_URL_PATTERN
    preference_key = "googlescholar_scraper"

    def _citation_fields(self, document: str) -> Dict[str, str]:
        return {
            strip_html(label).lower(): strip_html(value)
            for label, value in SCHOLAR_FIELD_PATTERN.findall(document)
        }

    async def parsing_process(self, web_content: WebContent) -> Optional[PaperEntityDraft]:
        title_match = SCHOLAR_TITLE_PATTERN.search(web_content.document)
        title = strip_html(title_match.group(1)) if title_match else ""
        if not title:
            self.logger.debug(f"No citation title on {web_content.url}")
            return None

        citation = self._citation_fields(web_content.document)

        entity_draft = PaperEntityDraft()
        entity_draft.set_value("title", title)
        if citation.get("authors"):
            entity_draft.set_value("authors", citation["authors"])
        if citation.get("publication date"):
            entity_draft.set_value("pub_time", extract_year(citation["publication date"]))

        for label, pub_type in VENUE_FIELDS.items():
            if citation.get(label):
                entity_draft.set_value("publication", citation[label])
                entity_draft.set_value("pub_type", pub_type)
                break

        pdf_match = SCHOLAR_PDF_LINK_PATTERN.search(web_content.document)
        if pdf_match:
            pdf_url = strip_html(pdf_match.group(1))
            headers = {"Cookie": web_content.cookies} if web_content.cookies else None
            try:
                main_url = await self._download_pdf(pdf_url, f"{title[:80]}.pdf", headers=headers)
                entity_draft.set_value("main_url", main_url)
            except (HttpRequestError, aiohttp.ClientError) as e:
                # external mirrors break often; the citation data is still good
                self.logger.warning(f"Could not download PDF from {pdf_url}: {e}")

        self.logger.info(f"Imported Google Scholar citation: {title}")
        return entity_draft
