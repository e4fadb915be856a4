from typing import Dict, List, Optional

import aiohttp

from paperscrape.common.regex_patterns import extract_meta_tags, extract_year
from paperscrape.errors import HttpRequestError
from paperscrape.importers.base import BaseWebImporter, WebContent
from paperscrape.model.draft import PaperEntityDraft
from paperscrape.utils import format_string


def _author_name(author: str) -> str:
    """Turn 'Last, First' into 'First Last' so names survive a comma-joined list."""
    last, sep, first = author.partition(",")
    if not sep or "," in first:
        return author.strip()
    return f"{first.strip()} {last.strip()}".strip()


def _first(tags: Dict[str, List[str]], *names: str) -> str:
    for name in names:
        for value in tags.get(name, []):
            if value:
                return value
    return ""


class EmbedWebImporter(BaseWebImporter):
    """
    Any page that embeds Highwire Press `citation_*` meta tags.

    Publishers, preprint servers and proceedings sites commonly carry them,
    which makes this the catch-all at the end of the chain. It has no URL
    gate and no preference switch.
    """

    async def parsing_process(self, web_content: WebContent) -> Optional[PaperEntityDraft]:
        tags = extract_meta_tags(web_content.document)

        title = format_string(_first(tags, "citation_title", "dc.title"), remove_newline=True, trim_white=True)
        if not title:
            return None

        entity_draft = PaperEntityDraft()
        entity_draft.set_value("title", title)

        authors = tags.get("citation_author") or tags.get("dc.creator") or []
        entity_draft.set_value("authors", ", ".join(_author_name(a) for a in authors if a.strip()))

        year = extract_year(_first(tags, "citation_publication_date", "citation_date", "citation_online_date", "dc.date"))
        if year:
            entity_draft.set_value("pub_time", year)

        doi = _first(tags, "citation_doi", "dc.identifier")
        if doi.startswith("10."):
            entity_draft.set_value("doi", doi)
        elif doi.lower().startswith("doi:"):
            entity_draft.set_value("doi", doi[4:].strip())

        arxiv_id = _first(tags, "citation_arxiv_id")
        if arxiv_id:
            entity_draft.set_value("arxiv", f"arXiv:{arxiv_id}")

        journal = _first(tags, "citation_journal_title")
        conference = _first(tags, "citation_conference_title")
        if journal:
            entity_draft.set_value("publication", journal)
            entity_draft.set_value("pub_type", 0)
        elif conference:
            entity_draft.set_value("publication", conference)
            entity_draft.set_value("pub_type", 1)

        pdf_url = _first(tags, "citation_pdf_url")
        if pdf_url:
            headers = {"Cookie": web_content.cookies} if web_content.cookies else None
            try:
                main_url = await self._download_pdf(pdf_url, f"{title[:80]}.pdf", headers=headers)
                entity_draft.set_value("main_url", main_url)
            except (HttpRequestError, aiohttp.ClientError) as e:
                self.logger.warning(f"Could not download PDF from {pdf_url}: {e}")

        self.logger.info(f"Imported embedded citation from {web_content.url}: {title}")
        return entity_draft
