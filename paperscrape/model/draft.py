"""Mutable draft record that scrapers and web importers fill in."""

from dataclasses import dataclass, field, fields, asdict
from typing import Dict, Any, List


@dataclass
class PaperEntityDraft:
    """
    Bag of bibliographic fields for one paper, accumulated across scrapers.

    The draft is owned by whoever created it and is passed from one strategy
    to the next; each strategy mutates it in place and hands the same object
    back. `set_value` never second-guesses the caller: deciding whether new
    evidence is strong enough to replace an existing value is the scraper's
    job.
    """

    id: str = ""
    title: str = ""
    authors: str = ""
    publication: str = ""
    pub_time: str = ""
    pub_type: int = 2  # 0 journal, 1 conference, 2 others, 3 book
    doi: str = ""
    arxiv: str = ""
    main_url: str = ""
    sup_urls: List[str] = field(default_factory=list)
    rating: int = 0
    tags: List[str] = field(default_factory=list)
    folders: List[str] = field(default_factory=list)
    flag: bool = False
    note: str = ""

    def set_value(self, key: str, value: Any) -> None:
        """Overwrite a field. Unknown field names raise KeyError."""
        if key not in self.field_names():
            raise KeyError(f"PaperEntityDraft has no field '{key}'")
        setattr(self, key, value)

    def is_empty(self) -> bool:
        """True when every field still holds its initial value."""
        return self == PaperEntityDraft()

    def copy(self) -> "PaperEntityDraft":
        return PaperEntityDraft.from_dict(self.to_dict())

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PaperEntityDraft":
        """Build a draft from a dict, ignoring keys that are not draft fields."""
        names = cls.field_names()
        return cls(**{k: v for k, v in data.items() if k in names})

    @classmethod
    def field_names(cls) -> List[str]:
        return [f.name for f in fields(cls)]

    def __str__(self) -> str:
        return f"PaperEntityDraft({self.title or self.main_url or 'empty'})"
