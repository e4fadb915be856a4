import asyncio
import xml.etree.ElementTree as ET
from typing import Dict, List, Optional

from paperscrape.common import http_utils
from paperscrape.common.regex_patterns import ARXIV_ABS_URL_PATTERN, extract_year
from paperscrape.errors import ImporterParseError
from paperscrape.importers.base import BaseWebImporter, WebContent
from paperscrape.model.draft import PaperEntityDraft
from paperscrape.utils import format_string

ARXIV_API_URL = "https://export.arxiv.org/api/query?id_list={arxiv_id}"
ARXIV_PDF_URL = "https://arxiv.org/pdf/{arxiv_id}.pdf"
ATOM_NS = {"atom": "http://www.w3.org/2005/Atom"}


class ArXivWebImporter(BaseWebImporter):
    """arXiv abstract pages, resolved through the arXiv export API."""

    url_regexp = ARXIV_ABS_URL_PATTERN
    preference_key = "arxiv_scraper"

    def _arxiv_id(self, url: str) -> str:
        match = self.url_regexp.search(url.split("?")[0].split("#")[0])
        if not match:
            raise ImporterParseError(f"No arXiv id in {url}")
        return match.group(1)

    def _parse_entry(self, xml_text: str) -> Dict[str, object]:
        root = ET.fromstring(xml_text)
        entry = root.find("atom:entry", ATOM_NS)
        if entry is None:
            raise ImporterParseError("arXiv API response has no entry")

        entry_id = entry.findtext("atom:id", default="", namespaces=ATOM_NS)
        if "api/errors" in entry_id:
            summary = entry.findtext("atom:summary", default="", namespaces=ATOM_NS)
            raise ImporterParseError(f"arXiv API error: {summary.strip()}")

        authors: List[str] = [
            format_string(author.findtext("atom:name", default="", namespaces=ATOM_NS), trim_white=True)
            for author in entry.findall("atom:author", ATOM_NS)
        ]
        return {
            "title": entry.findtext("atom:title", default="", namespaces=ATOM_NS),
            "authors": [a for a in authors if a],
            "published": entry.findtext("atom:published", default="", namespaces=ATOM_NS),
        }

    async def parsing_process(self, web_content: WebContent) -> Optional[PaperEntityDraft]:
        arxiv_id = self._arxiv_id(web_content.url)
        api_url = ARXIV_API_URL.format(arxiv_id=arxiv_id)

        xml_text = await http_utils.get_text(api_url, **self._http_options(api_url))
        entry = await asyncio.to_thread(self._parse_entry, xml_text)

        title = format_string(entry["title"], remove_newline=True, trim_white=True)
        if not title:
            self.logger.warning(f"arXiv entry {arxiv_id} has no title")
            return None

        entity_draft = PaperEntityDraft()
        entity_draft.set_value("title", title)
        entity_draft.set_value("authors", ", ".join(entry["authors"]))
        entity_draft.set_value("pub_time", extract_year(entry["published"]))
        entity_draft.set_value("pub_type", 0)
        entity_draft.set_value("publication", "arXiv")
        entity_draft.set_value("arxiv", f"arXiv:{arxiv_id}")

        pdf_url = ARXIV_PDF_URL.format(arxiv_id=arxiv_id)
        main_url = await self._download_pdf(pdf_url, f"{arxiv_id}.pdf")
        entity_draft.set_value("main_url", main_url)

        self.logger.info(f"Imported arXiv:{arxiv_id} ({title})")
        return entity_draft
