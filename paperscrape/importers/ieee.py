import json
from typing import Any, Dict, Optional

import aiohttp

from paperscrape.common import http_utils
from paperscrape.common.regex_patterns import IEEE_DOCUMENT_URL_PATTERN, IEEE_METADATA_PATTERN, extract_year
from paperscrape.errors import HttpRequestError, ImporterParseError
from paperscrape.importers.base import BaseWebImporter, WebContent
from paperscrape.model.draft import PaperEntityDraft
from paperscrape.utils import format_string

IEEE_PDF_URL = "https://ieeexplore.ieee.org/stampPDF/getPDF.jsp?tp=&arnumber={article_number}&ref="
IEEE_API_URL = "https://ieeexploreapi.ieee.org/api/v1/search/articles?article_number={article_number}&apikey={api_key}&format=json"

CONTENT_TYPE_PUB_TYPE = {
    "periodicals": 0,
    "journals": 0,
    "conferences": 1,
    "books": 3,
}


class IEEEWebImporter(BaseWebImporter):
    """
    IEEE Xplore document pages.

    Xplore embeds the paper record as `xplGlobal.document.metadata = {...};`
    in the page. When it is missing (stripped or paywalled captures) and an
    API key is configured, the Xplore search API is asked instead.
    """

    url_regexp = IEEE_DOCUMENT_URL_PATTERN
    preference_key = "ieee_scraper"

    def _embedded_metadata(self, document: str) -> Optional[Dict[str, Any]]:
        match = IEEE_METADATA_PATTERN.search(document)
        if not match:
            return None
        try:
            return json.loads(match.group(1))
        except json.JSONDecodeError as e:
            raise ImporterParseError(f"Malformed xplGlobal metadata: {e}") from e

    async def _api_metadata(self, article_number: str) -> Optional[Dict[str, Any]]:
        api_key = self.preference.get("ieee_api_key")
        if not api_key:
            return None

        api_url = IEEE_API_URL.format(article_number=article_number, api_key=api_key)
        response = await http_utils.get_json(api_url, **self._http_options(api_url))
        articles = response.get("articles") or []
        if not articles:
            return None

        article = articles[0]
        # normalise the API record to the embedded-page shape
        return {
            "title": article.get("title", ""),
            "authors": [
                {"name": author.get("full_name", "")}
                for author in article.get("authors", {}).get("authors", [])
            ],
            "publicationTitle": article.get("publication_title", ""),
            "publicationYear": article.get("publication_year", ""),
            "doi": article.get("doi", ""),
            "contentType": article.get("content_type", ""),
        }

    async def parsing_process(self, web_content: WebContent) -> Optional[PaperEntityDraft]:
        article_number = self.url_regexp.search(web_content.url).group(1)

        metadata = self._embedded_metadata(web_content.document)
        if metadata is None:
            metadata = await self._api_metadata(article_number)
        if not metadata or not metadata.get("title"):
            self.logger.debug(f"No IEEE record for article {article_number}")
            return None

        entity_draft = PaperEntityDraft()
        entity_draft.set_value("title", format_string(metadata["title"], remove_newline=True, trim_white=True))
        authors = [a.get("name", "").strip() for a in metadata.get("authors") or []]
        entity_draft.set_value("authors", ", ".join(a for a in authors if a))
        entity_draft.set_value("publication", metadata.get("publicationTitle", ""))
        entity_draft.set_value("pub_time", extract_year(str(metadata.get("publicationYear", ""))))
        if metadata.get("doi"):
            entity_draft.set_value("doi", metadata["doi"])

        content_type = str(metadata.get("contentType", "")).lower()
        entity_draft.set_value("pub_type", CONTENT_TYPE_PUB_TYPE.get(content_type, 2))

        pdf_url = IEEE_PDF_URL.format(article_number=article_number)
        headers = {"Cookie": web_content.cookies} if web_content.cookies else None
        try:
            main_url = await self._download_pdf(pdf_url, f"ieee_{article_number}.pdf", headers=headers)
            entity_draft.set_value("main_url", main_url)
        except (HttpRequestError, aiohttp.ClientError) as e:
            self.logger.warning(f"Could not download IEEE PDF for {article_number}: {e}")

        self.logger.info(f"Imported IEEE article {article_number}")
        return entity_draft
