"""Exceptions raised by scrapers, web importers and the extraction pipeline."""


class PaperScrapeError(Exception):
    """Base class for every error raised by paperscrape."""


class ContractViolationError(PaperScrapeError):
    """A strategy was driven out of order. Always a programming error."""


class ScraperDisabledError(ContractViolationError):
    """`fetch` was called with a request whose gate said no."""

    def __init__(self, scraper: str, scrape_url: str = ""):
        self.scraper = scraper
        self.scrape_url = scrape_url
        super().__init__(f"{scraper} fetch invoked on a disabled request ({scrape_url or 'no locator'})")


class FetchError(PaperScrapeError):
    """Raised when a source cannot be read."""


class PdfNoPageError(FetchError):
    """The PDF opened fine but has no first page to read."""


class HttpRequestError(FetchError):
    def __init__(self, url: str, status: int):
        self.url = url
        self.status = status
        super().__init__(f"GET {url} failed with status {status}")


class ImporterParseError(PaperScrapeError):
    """Web content matched an importer but could not be parsed."""
