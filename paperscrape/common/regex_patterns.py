"""Common regex patterns used by the scrapers and web importers."""

import html
import re
from typing import Dict, List, Optional, Pattern


# Identifier patterns scanned on the first page of a PDF
ARXIV_ID_PATTERN: Pattern[str] = re.compile(r'arXiv:(\d{4}.\d{4,5}|[a-z\-]+(\.[A-Z]{2})?/\d{7})(v\d+)?')
DOI_PATTERN: Pattern[str] = re.compile(r'(?:(10[.][0-9]{4,}(?:[.][0-9]+)*/(?:(?![%"#? ])\S)+))')

# Web importer URL gates
ARXIV_ABS_URL_PATTERN: Pattern[str] = re.compile(r'https?://(?:www\.)?(?:export\.)?arxiv\.org/abs/(\S+?)/?$')
ARXIV_VERSION_SUFFIX_PATTERN: Pattern[str] = re.compile(r'v\d+$')
SCHOLAR_CITATION_URL_PATTERN: Pattern[str] = re.compile(r'https?://scholar\.google\.[a-z.]+/citations\?.*view_op=view_citation')
IEEE_DOCUMENT_URL_PATTERN: Pattern[str] = re.compile(r'https?://ieeexplore\.ieee\.org/(?:abstract/)?document/(\d+)')

# HTML scraping patterns
HTML_TAG_PATTERN: Pattern[str] = re.compile(r'<[^>]+>')
META_TAG_PATTERN: Pattern[str] = re.compile(r'<meta\s+[^>]*>', re.IGNORECASE)
META_ATTR_PATTERN: Pattern[str] = re.compile(r'([a-zA-Z_:-]+)\s*=\s*(?:"([^"]*)"|\'([^\']*)\')')
IEEE_METADATA_PATTERN: Pattern[str] = re.compile(r'xplGlobal\.document\.metadata\s*=\s*(\{.*?\});\s*\n', re.DOTALL)
YEAR_PATTERN: Pattern[str] = re.compile(r'\b(\d{4})\b')

# Google Scholar citation page
SCHOLAR_TITLE_PATTERN: Pattern[str] = re.compile(r'<div id="gsc_oci_title"[^>]*>(.*?)</div>', re.DOTALL)
SCHOLAR_FIELD_PATTERN: Pattern[str] = re.compile(
    r'<div class="gsc_oci_field">(.*?)</div>\s*<div class="gsc_oci_value"[^>]*>(.*?)</div>', re.DOTALL
)
SCHOLAR_PDF_LINK_PATTERN: Pattern[str] = re.compile(
    r'<div class="gsc_oci_title_ggi">\s*<a href="([^"]+)"', re.DOTALL
)


def strip_html(fragment: Optional[str]) -> str:
    """
    Drop tags, unescape entities and collapse whitespace.

    Args:
        fragment: HTML fragment

    Returns:
        Plain text, empty string for None
    """
    if not fragment:
        return ""
    text = HTML_TAG_PATTERN.sub(' ', fragment)
    text = html.unescape(text)
    return ' '.join(text.split())


def extract_meta_tags(html_content: str) -> Dict[str, List[str]]:
    """
    Collect `<meta name=... content=...>` pairs.

    Repeated names (e.g. one `citation_author` per author) keep every value
    in document order. Names are lowercased.

    Args:
        html_content: Raw HTML content as string

    Returns:
        Mapping of meta name to list of contents
    """
    tags: Dict[str, List[str]] = {}
    for tag in META_TAG_PATTERN.findall(html_content):
        attrs = {}
        for key, dq, sq in META_ATTR_PATTERN.findall(tag):
            attrs[key.lower()] = dq if dq else sq
        name = attrs.get('name') or attrs.get('property')
        if not name or 'content' not in attrs:
            continue
        tags.setdefault(name.lower(), []).append(html.unescape(attrs['content']).strip())
    return tags


def extract_year(value: Optional[str]) -> str:
    """First four-digit group in `value`, or empty string."""
    if not value:
        return ""
    match = YEAR_PATTERN.search(str(value))
    return match.group(1) if match else ""
