"""
Web importers for pages already fetched by the host application.

Importer Classes:
- WebContent: the captured page (URL, markup, cookies)
- BaseWebImporter: URL/preference gate, logging, PDF download helper
- ArXivWebImporter: arxiv.org abstract pages via the export API
- GoogleScholarWebImporter: Google Scholar citation pages
- IEEEWebImporter: IEEE Xplore document pages
- EmbedWebImporter: any page with `citation_*` meta tags
- WebImporterRepository: first-match-wins chain over the importers above
"""
