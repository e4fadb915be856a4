"""Tests for the individual web importers."""

import json
from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest

from paperscrape.errors import HttpRequestError, ImporterParseError
from paperscrape.importers.arxiv import ArXivWebImporter
from paperscrape.importers.base import WebContent, WebImporter
from paperscrape.importers.embed import EmbedWebImporter
from paperscrape.importers.google_scholar import GoogleScholarWebImporter
from paperscrape.importers.ieee import IEEEWebImporter

ARXIV_FEED = """<feed xmlns="http://www.w3.org/2005/Atom">
  <entry>
    <id>http://arxiv.org/abs/1706.03762v5</id>
    <published>2017-06-12T17:57:34Z</published>
    <title>Attention Is All
      You Need</title>
    <author><name>Ashish Vaswani</name></author>
    <author><name>Noam Shazeer</name></author>
  </entry>
</feed>"""

ARXIV_ERROR_FEED = """<feed xmlns="http://www.w3.org/2005/Atom">
  <entry>
    <id>http://arxiv.org/api/errors#incorrect_id_format_for_9999</id>
    <title>Error</title>
    <summary>incorrect id format for 9999</summary>
  </entry>
</feed>"""

SCHOLAR_PAGE = """
<div id="gsc_oci_title_gg"><div class="gsc_oci_title_ggi"><a href="https://example.org/resnet.pdf?a=1&amp;b=2"><span>[PDF]</span></a></div></div>
<div id="gsc_oci_title"><a class="gsc_oci_title_link" href="https://example.org">Deep residual learning for image recognition</a></div>
<div id="gsc_oci_table">
<div class="gs_scl"><div class="gsc_oci_field">Authors</div><div class="gsc_oci_value">Kaiming He, Xiangyu Zhang, Shaoqing Ren, Jian Sun</div></div>
<div class="gs_scl"><div class="gsc_oci_field">Publication date</div><div class="gsc_oci_value">2016</div></div>
<div class="gs_scl"><div class="gsc_oci_field">Conference</div><div class="gsc_oci_value">Proceedings of the IEEE CVPR</div></div>
</div>
"""

IEEE_RECORD = {
    "title": "Deep Residual Learning for Image Recognition",
    "authors": [{"name": "Kaiming He"}, {"name": "Xiangyu Zhang"}],
    "publicationTitle": "2016 IEEE Conference on Computer Vision and Pattern Recognition (CVPR)",
    "publicationYear": "2016",
    "doi": "10.1109/CVPR.2016.90",
    "contentType": "conferences",
}

EMBED_PAGE = """<html><head>
<meta name="citation_title" content="Mastering the game of Go">
<meta name="citation_author" content="Silver, David">
<meta name="citation_author" content="Huang, Aja">
<meta name="citation_journal_title" content="Nature">
<meta name="citation_publication_date" content="2016/01/28">
<meta name="citation_doi" content="10.1038/nature16961">
<meta name="citation_pdf_url" content="https://www.nature.com/articles/nature16961.pdf">
</head><body></body></html>"""


@pytest.fixture
def mock_download():
    with patch("paperscrape.common.http_utils.download_file", new_callable=AsyncMock) as mocked:
        yield mocked


class TestArXivWebImporter:
    """Test suite for ArXivWebImporter."""

    @pytest.fixture
    def importer(self, preference):
        return ArXivWebImporter(preference)

    def test_is_a_web_importer(self, importer):
        assert isinstance(importer, WebImporter)

    def test_gate(self, importer, preference):
        assert importer.preprocess(WebContent(url="https://arxiv.org/abs/1706.03762v5"))
        assert not importer.preprocess(WebContent(url="https://example.org/abs/1706.03762"))

        preference.set("arxiv_scraper", False)
        assert not importer.preprocess(WebContent(url="https://arxiv.org/abs/1706.03762v5"))

    @pytest.mark.asyncio
    async def test_unrelated_page(self, importer):
        with patch("paperscrape.common.http_utils.get_text", new_callable=AsyncMock) as mock_get:
            result = await importer.parse(WebContent(url="https://example.org"))

        assert result is None
        mock_get.assert_not_called()

    @pytest.mark.asyncio
    async def test_parse(self, importer, preference, mock_download):
        with patch("paperscrape.common.http_utils.get_text", new_callable=AsyncMock) as mock_get:
            mock_get.return_value = ARXIV_FEED
            draft = await importer.parse(WebContent(url="https://arxiv.org/abs/1706.03762v5?context=cs"))

        assert mock_get.await_args.args[0] == "https://export.arxiv.org/api/query?id_list=1706.03762v5"
        assert draft.title == "Attention Is All You Need"
        assert draft.authors == "Ashish Vaswani, Noam Shazeer"
        assert draft.pub_time == "2017"
        assert draft.pub_type == 0
        assert draft.publication == "arXiv"
        assert draft.arxiv == "arXiv:1706.03762v5"
        assert draft.main_url == str(Path(preference.get("download_folder")) / "1706.03762v5.pdf")
        assert mock_download.await_args.args[0] == "https://arxiv.org/pdf/1706.03762v5.pdf"

    @pytest.mark.asyncio
    async def test_api_error_entry(self, importer, mock_download):
        with patch("paperscrape.common.http_utils.get_text", new_callable=AsyncMock) as mock_get:
            mock_get.return_value = ARXIV_ERROR_FEED
            with pytest.raises(ImporterParseError):
                await importer.parse(WebContent(url="https://arxiv.org/abs/9999"))

        mock_download.assert_not_called()

    @pytest.mark.asyncio
    async def test_download_failure_propagates(self, importer, mock_download):
        mock_download.side_effect = HttpRequestError("https://arxiv.org/pdf/1706.03762v5.pdf", 503)

        with patch("paperscrape.common.http_utils.get_text", new_callable=AsyncMock) as mock_get:
            mock_get.return_value = ARXIV_FEED
            with pytest.raises(HttpRequestError):
                await importer.parse(WebContent(url="https://arxiv.org/abs/1706.03762v5"))


class TestGoogleScholarWebImporter:
    """Test suite for GoogleScholarWebImporter."""

    URL = "https://scholar.google.com/citations?view_op=view_citation&hl=en&user=abc&citation_for_view=abc:xyz"

    @pytest.fixture
    def importer(self, preference):
        return GoogleScholarWebImporter(preference)

    def test_gate(self, importer):
        assert importer.preprocess(WebContent(url=self.URL))
        assert not importer.preprocess(WebContent(url="https://scholar.google.com/scholar?q=resnet"))

    @pytest.mark.asyncio
    async def test_parse(self, importer, mock_download):
        draft = await importer.parse(WebContent(url=self.URL, document=SCHOLAR_PAGE, cookies="NID=1"))

        assert draft.title == "Deep residual learning for image recognition"
        assert draft.authors == "Kaiming He, Xiangyu Zhang, Shaoqing Ren, Jian Sun"
        assert draft.pub_time == "2016"
        assert draft.publication == "Proceedings of the IEEE CVPR"
        assert draft.pub_type == 1
        assert draft.main_url.endswith(".pdf")
        assert mock_download.await_args.args[0] == "https://example.org/resnet.pdf?a=1&b=2"
        assert mock_download.await_args.kwargs["headers"] == {"Cookie": "NID=1"}

    @pytest.mark.asyncio
    async def test_download_failure_keeps_citation(self, importer, mock_download):
        mock_download.side_effect = HttpRequestError("https://example.org/resnet.pdf", 404)

        draft = await importer.parse(WebContent(url=self.URL, document=SCHOLAR_PAGE))

        assert draft.title == "Deep residual learning for image recognition"
        assert draft.main_url == ""

    @pytest.mark.asyncio
    async def test_page_without_citation(self, importer, mock_download):
        assert await importer.parse(WebContent(url=self.URL, document="<html></html>")) is None


class TestIEEEWebImporter:
    """Test suite for IEEEWebImporter."""

    URL = "https://ieeexplore.ieee.org/document/7780459"

    @pytest.fixture
    def importer(self, preference):
        return IEEEWebImporter(preference)

    def page(self, record):
        return f"<script>\nxplGlobal.document.metadata={json.dumps(record)};\n</script>"

    @pytest.mark.asyncio
    async def test_parse_embedded_metadata(self, importer, mock_download):
        draft = await importer.parse(WebContent(url=self.URL, document=self.page(IEEE_RECORD), cookies="JSESSIONID=1"))

        assert draft.title == "Deep Residual Learning for Image Recognition"
        assert draft.authors == "Kaiming He, Xiangyu Zhang"
        assert draft.pub_time == "2016"
        assert draft.doi == "10.1109/CVPR.2016.90"
        assert draft.pub_type == 1
        assert "arnumber=7780459" in mock_download.await_args.args[0]

    @pytest.mark.asyncio
    async def test_malformed_metadata(self, importer, mock_download):
        page = "xplGlobal.document.metadata={not json};\n"

        with pytest.raises(ImporterParseError):
            await importer.parse(WebContent(url=self.URL, document=page))

    @pytest.mark.asyncio
    async def test_no_metadata_and_no_api_key(self, importer, mock_download):
        assert await importer.parse(WebContent(url=self.URL, document="<html></html>")) is None

    @pytest.mark.asyncio
    async def test_api_fallback(self, importer, preference, mock_download):
        preference.set("ieee_api_key", "key")
        api_response = {
            "articles": [{
                "title": "Deep Residual Learning for Image Recognition",
                "authors": {"authors": [{"full_name": "Kaiming He"}]},
                "publication_title": "CVPR",
                "publication_year": 2016,
                "doi": "10.1109/CVPR.2016.90",
                "content_type": "Conferences",
            }]
        }

        with patch("paperscrape.common.http_utils.get_json", new_callable=AsyncMock) as mock_get:
            mock_get.return_value = api_response
            draft = await importer.parse(WebContent(url=self.URL, document="<html></html>"))

        assert "article_number=7780459" in mock_get.await_args.args[0]
        assert draft.authors == "Kaiming He"
        assert draft.pub_time == "2016"
        assert draft.pub_type == 1


class TestEmbedWebImporter:
    """Test suite for EmbedWebImporter."""

    @pytest.fixture
    def importer(self, preference):
        return EmbedWebImporter(preference)

    def test_gate_accepts_any_page(self, importer):
        assert importer.preprocess(WebContent(url="https://anything.example"))

    @pytest.mark.asyncio
    async def test_parse(self, importer, mock_download):
        draft = await importer.parse(WebContent(url="https://www.nature.com/articles/nature16961", document=EMBED_PAGE))

        assert draft.title == "Mastering the game of Go"
        assert draft.authors == "David Silver, Aja Huang"
        assert draft.publication == "Nature"
        assert draft.pub_type == 0
        assert draft.pub_time == "2016"
        assert draft.doi == "10.1038/nature16961"
        assert mock_download.await_args.args[0] == "https://www.nature.com/articles/nature16961.pdf"

    @pytest.mark.asyncio
    async def test_page_without_citation_tags(self, importer, mock_download):
        assert await importer.parse(WebContent(url="https://example.org", document="<title>Hi</title>")) is None
        mock_download.assert_not_called()

    @pytest.mark.asyncio
    async def test_authors_already_in_display_order(self, importer, mock_download):
        page = (
            '<meta name="dc.title" content="A Paper">'
            '<meta name="dc.creator" content="Jane Doe">'
            '<meta name="dc.creator" content="Lovelace, Ada">'
        )

        draft = await importer.parse(WebContent(url="https://example.org/paper", document=page))

        assert draft.authors == "Jane Doe, Ada Lovelace"
