"""
Scrapers for sources located by the draft (currently local PDF files).

Scraper Classes:
- ScraperRequest: gate decision plus locator, computed once per run
- BaseScraper: logging/preference plumbing and the gate-fetch-parse driver
- PDFScraper: first-page heuristics on local PDF files
- ScraperRepository: ordered chain of scrapers

Usage:
    from paperscrape.scrapers.pdf import PDFScraper

    scraper = PDFScraper(preference)
    draft = await scraper.scrape(draft)
"""
