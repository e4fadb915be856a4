from paperscrape.model.draft import PaperEntityDraft

__all__ = ["PaperEntityDraft"]
