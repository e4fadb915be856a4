import argparse
import asyncio
import json
import time
from pathlib import Path
from typing import List, Optional, Sequence, Union

from paperscrape.base_step import PipelineStep
from paperscrape.common import http_utils
from paperscrape.config import Preference, load_preference
from paperscrape.errors import ContractViolationError
from paperscrape.importers.base import WebContent
from paperscrape.importers.repository import WebImporterRepository
from paperscrape.logging import get_logger, set_log_level
from paperscrape.model.draft import PaperEntityDraft
from paperscrape.scrapers.repository import ScraperRepository
from paperscrape.state import SharedState, StatusChannel

Source = Union[PaperEntityDraft, WebContent]


class ExtractionPipeline(PipelineStep):
    """
    Entry point of the extraction pipeline.

    Picks the chain for the kind of source it is handed:

    - a `PaperEntityDraft` goes through the scraper chain and comes back
      (possibly unchanged when no scraper is gated in);
    - a `WebContent` goes through the web importer chain and comes back as
      a new draft, or None when no importer recognised the page.

    Fetch failures and contract violations are not caught here. Callers
    that need a deadline wrap `extract` in `asyncio.wait_for`.
    """

    def __init__(
        self,
        config: Preference,
        shared_state: Optional[StatusChannel] = None,
        scraper_repository: Optional[ScraperRepository] = None,
        web_importer_repository: Optional[WebImporterRepository] = None,
    ):
        super().__init__(config)
        self.preference = config
        self.shared_state = shared_state if shared_state is not None else SharedState()
        self.scraper_repository = scraper_repository or ScraperRepository(self.preference)
        self.web_importer_repository = web_importer_repository or WebImporterRepository(
            self.shared_state, self.preference
        )

    async def extract(self, source: Source) -> Optional[PaperEntityDraft]:
        if isinstance(source, PaperEntityDraft):
            return await self.scraper_repository.scrape(source)
        if isinstance(source, WebContent):
            return await self.web_importer_repository.parse(source)
        raise TypeError(f"Cannot extract from {type(source).__name__}")

    async def execute(self, sources: List[Source]) -> List[Optional[PaperEntityDraft]]:
        """
        Run `extract` over many independent sources concurrently.

        A source that fails is logged and stands in for its own result
        (a draft comes back as it went in, a page as None). Contract
        violations are re-raised once the batch has settled.

        Args:
            sources: Drafts and/or web pages; a draft object may appear once

        Returns:
            One result per source, in input order
        """
        if not sources:
            self.logger.warning("No sources provided to extraction pipeline")
            return []

        if len({id(source) for source in sources}) != len(sources):
            raise ValueError("The same source object was passed more than once")

        self.logger.info(f"Extracting metadata from {len(sources)} sources")

        tasks = [self.extract(source) for source in sources]
        processed = await asyncio.gather(*tasks, return_exceptions=True)

        results: List[Optional[PaperEntityDraft]] = []
        for source, result in zip(sources, processed):
            if isinstance(result, ContractViolationError):
                raise result
            if isinstance(result, Exception):
                self.logger.error(f"Exception processing {source}: {result}")
                results.append(source if isinstance(source, PaperEntityDraft) else None)
            else:
                results.append(result)

        matched = sum(1 for result in results if result is not None and not result.is_empty())
        self.logger.info(f"Extracted metadata for {matched}/{len(sources)} sources")
        return results


async def _load_web_content(url: str, preference: Preference) -> WebContent:
    document = await http_utils.get_text(
        url,
        timeout=preference.get("http_timeout"),
        proxy=preference.proxy_for(url),
    )
    return WebContent(url=url, document=document)


async def run(args: argparse.Namespace) -> List[Optional[PaperEntityDraft]]:
    logger = get_logger("pipeline")
    preference = load_preference(args.config) if args.config else Preference()
    extraction = ExtractionPipeline(preference)

    start_time = time.perf_counter()
    if args.command == "pdf":
        sources: List[Source] = [PaperEntityDraft(main_url=str(Path(p).expanduser().resolve())) for p in args.paths]
        results = await extraction.execute(sources)
    else:
        loaded = await asyncio.gather(
            *[_load_web_content(url, preference) for url in args.urls], return_exceptions=True
        )
        pages: List[WebContent] = []
        for url, page in zip(args.urls, loaded):
            if isinstance(page, Exception):
                logger.error(f"Could not fetch {url}: {page}")
            else:
                pages.append(page)

        parsed = iter(await extraction.execute(pages))
        results = [None if isinstance(page, Exception) else next(parsed) for page in loaded]

    logger.info(f"Extraction completed in {time.perf_counter() - start_time:.2f} seconds")
    return results


def main(argv: Optional[Sequence[str]] = None) -> int:
    """entry point for the extraction pipeline"""
    parser = argparse.ArgumentParser(prog="paperscrape")
    parser.add_argument("--config", help="YAML file with a `preference` section")
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    subparsers = parser.add_subparsers(dest="command")

    pdf_parser = subparsers.add_parser("pdf", help="Extract metadata from local PDF files")
    pdf_parser.add_argument("paths", nargs="+")

    web_parser = subparsers.add_parser("web", help="Fetch web pages and extract metadata from them")
    web_parser.add_argument("urls", nargs="+")

    args = parser.parse_args(argv)
    if args.command not in ("pdf", "web"):
        parser.print_help()
        return 1

    set_log_level(args.log_level)
    results = asyncio.run(run(args))
    for result in results:
        print(json.dumps(result.to_dict() if result is not None else None, ensure_ascii=False))
    return 0


def cli():
    raise SystemExit(main())
