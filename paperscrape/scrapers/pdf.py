"""
Built-in scraper for local PDF files.

The scraper only looks at the first page of the document:

1. **Document metadata**: `Title` / `Author` seed the draft when present.
2. **Identifiers**: the first-page text is scanned for an arXiv id and,
   independently, for a DOI. Either one is stronger evidence than anything
   the layout can tell us, so when one is found the metadata title stays.
3. **Dominant text**: with no identifier at all the title is replaced by
   the text set in the tallest font on the page, which on most papers is
   the title itself.

pdfplumber does the PDF parsing; it is synchronous, so it runs in a worker
thread.
"""

import asyncio
import io
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Tuple

import pdfplumber

from paperscrape.common.regex_patterns import ARXIV_ID_PATTERN, DOI_PATTERN
from paperscrape.errors import PdfNoPageError
from paperscrape.model.draft import PaperEntityDraft
from paperscrape.scrapers.base import BaseScraper, ScraperRequest
from paperscrape.utils import construct_file_url, find_format, format_string, read_file


@dataclass(frozen=True)
class TextRun:
    """One run of text on a page as laid out by the PDF."""

    text: str
    height: float
    baseline: float


@dataclass
class PdfFileResponse:
    metadata: Dict[str, Any] = field(default_factory=dict)
    first_page_text: str = ""
    largest_text: str = ""


def _join_runs(texts: List[str]) -> str:
    return " ".join(text for text in texts if len(text) > 0)


def render_page(runs: List[TextRun]) -> Tuple[str, str]:
    """
    Flatten a page's text runs and pick out its dominant text.

    Runs are concatenated in reading order; a newline is inserted whenever a
    run sits on a different baseline than the one before it. Runs sharing a
    baseline are separated by a space, since the whitespace between words
    never makes it into the runs themselves.

    The dominant text is the group of runs sharing the largest height,
    joined with spaces. When that group boils down to a single character
    (page numbers and decorative glyphs are often the tallest thing on the
    page) the next-tallest group is used instead.

    Args:
        runs: Text runs of one page, in content-stream order

    Returns:
        Tuple of (page text, dominant text)
    """
    text = ""
    last_baseline = None
    groups: Dict[float, List[str]] = {}

    for run in runs:
        if run.height > 0:
            groups.setdefault(run.height, []).append(run.text)

        if last_baseline is None:
            text += run.text
        elif run.baseline != last_baseline:
            text += "\n" + run.text
        elif text and not text[-1].isspace() and run.text and not run.text[0].isspace():
            text += " " + run.text
        else:
            text += run.text
        last_baseline = run.baseline

    heights = sorted(groups, reverse=True)
    largest_text = _join_runs(groups[heights[0]]) if heights else ""
    second_largest_text = _join_runs(groups[heights[1]]) if len(heights) > 1 else ""

    if len(largest_text) == 1:
        largest_text = second_largest_text

    return text, largest_text


def _metadata_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bytes):
        value = value.decode("utf-8", errors="ignore")
    return format_string(str(value), remove_newline=True, trim_white=True)


class PDFScraper(BaseScraper):
    """Title, authors, arXiv id and DOI from the first page of a local PDF."""

    def preprocess(self, entity_draft: PaperEntityDraft) -> ScraperRequest:
        lib_folder = self.preference.get("app_lib_folder")
        main_url = entity_draft.main_url

        enable = (
            bool(self.preference.get("pdf_builtin_scraper"))
            and main_url != ""
            and find_format(Path(main_url)) == "pdf"
            and Path(construct_file_url(main_url, True, False, lib_folder)).is_file()
        )

        scrape_url = construct_file_url(main_url, True, True, lib_folder)
        return ScraperRequest(scrape_url=scrape_url, headers={}, enable=enable)

    def _read_first_page(self, data: bytes) -> Tuple[Dict[str, Any], List[TextRun]]:
        with pdfplumber.open(io.BytesIO(data)) as pdf:
            metadata = dict(pdf.metadata or {})
            if not pdf.pages:
                raise PdfNoPageError("PDF has no first page to read")

            words = pdf.pages[0].extract_words(
                keep_blank_chars=True,
                use_text_flow=True,
                extra_attrs=["size"],
                return_chars=True,
            )

        # matrix[5] is the y translation of the glyph origin, i.e. the baseline
        runs = [
            TextRun(
                text=word["text"],
                height=round(float(word["size"]), 2),
                baseline=round(float(word["chars"][0]["matrix"][5]), 2),
            )
            for word in words
        ]
        return metadata, runs

    async def fetch(self, request: ScraperRequest) -> PdfFileResponse:
        self.ensure_enabled(request)

        file_path = Path(construct_file_url(request.scrape_url, False, False))
        data = await read_file(file_path)
        metadata, runs = await asyncio.to_thread(self._read_first_page, data)
        first_page_text, largest_text = render_page(runs)

        self.logger.debug(f"Read {len(runs)} text runs from the first page of {file_path.name}")
        return PdfFileResponse(
            metadata=metadata,
            first_page_text=first_page_text,
            largest_text=largest_text,
        )

    def parsing_process(self, raw_response: PdfFileResponse, entity_draft: PaperEntityDraft) -> PaperEntityDraft:
        title = _metadata_text(raw_response.metadata.get("Title"))
        if title:
            entity_draft.set_value("title", title)
        authors = _metadata_text(raw_response.metadata.get("Author"))
        if authors:
            entity_draft.set_value("authors", authors)

        first_page_text = raw_response.first_page_text

        arxiv_match = ARXIV_ID_PATTERN.search(first_page_text)
        if arxiv_match:
            entity_draft.set_value("arxiv", format_string(arxiv_match.group(0), remove_white=True))

        doi_match = DOI_PATTERN.search(first_page_text)
        if doi_match:
            entity_draft.set_value("doi", format_string(doi_match.group(0), remove_white=True))

        if not arxiv_match and not doi_match and raw_response.largest_text:
            # nothing to anchor on, trust the layout
            entity_draft.set_value("title", raw_response.largest_text)

        self.logger.info(
            f"Parsed PDF {entity_draft.main_url}: arxiv={entity_draft.arxiv or '-'} doi={entity_draft.doi or '-'}"
        )
        return entity_draft
