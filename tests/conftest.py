"""Pytest configuration and fixtures for paperscrape tests."""

from pathlib import Path
from unittest.mock import Mock

import pytest
from reportlab.pdfgen import canvas

from paperscrape.config import Preference
from paperscrape.model.draft import PaperEntityDraft


@pytest.fixture
def lib_folder(tmp_path) -> Path:
    """Library root holding the PDFs drafts point at."""
    folder = tmp_path / "library"
    folder.mkdir()
    return folder


@pytest.fixture
def preference(lib_folder, tmp_path) -> Preference:
    """Preferences rooted in a temporary library folder."""
    return Preference(
        app_lib_folder=str(lib_folder),
        download_folder=str(tmp_path / "downloads"),
    )


@pytest.fixture
def sample_pdf(lib_folder) -> Path:
    """An existing file with a .pdf extension (content is never parsed for real)."""
    pdf_path = lib_folder / "paper.pdf"
    pdf_path.write_bytes(b"%PDF-1.4\n%fake\n")
    return pdf_path


@pytest.fixture
def write_pdf(lib_folder):
    """Factory for real one-page PDFs drawn with reportlab.

    Each line is `(font, size, x, y, text)`; every `drawString` becomes its
    own text run on the page.
    """
    def _write(name, lines, title="", author=""):
        pdf_path = lib_folder / name
        pdf = canvas.Canvas(str(pdf_path))
        pdf.setTitle(title)
        pdf.setAuthor(author)
        for font, size, x, y, text in lines:
            pdf.setFont(font, size)
            pdf.drawString(x, y, text)
        pdf.showPage()
        pdf.save()
        return pdf_path

    return _write


@pytest.fixture
def pdf_draft(sample_pdf) -> PaperEntityDraft:
    """Draft pointing at the sample PDF by a library-relative path."""
    return PaperEntityDraft(main_url=sample_pdf.name)


@pytest.fixture
def shared_state():
    """Status channel double."""
    return Mock()
