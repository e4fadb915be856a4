import re
import aiofiles
from typing import Optional
from pathlib import Path

FILE_PROTOCOL = "file://"


def find_format(file_path: Path):
    return file_path.suffix.lstrip('.').lower()

async def read_file(file_path: Path) -> bytes:
    async with aiofiles.open(file_path, "rb") as f:
        return await f.read()


def construct_file_url(url: str, joined: bool, with_protocol: bool = True, lib_folder: str = "") -> str:
    """
    Normalize a local file locator.

    Args:
        url: Locator as stored on a draft, with or without `file://`
        joined: Join relative locators onto `lib_folder`
        with_protocol: Return the locator prefixed with `file://`
        lib_folder: Library root used for relative locators

    Returns:
        The normalized locator (empty string stays empty)
    """
    if not url:
        return ""

    path = url[len(FILE_PROTOCOL):] if url.startswith(FILE_PROTOCOL) else url
    if joined and lib_folder and not Path(path).is_absolute():
        path = str(Path(lib_folder).expanduser() / path)

    return f"{FILE_PROTOCOL}{path}" if with_protocol else path


def format_string(
    s: Optional[str],
    remove_str: Optional[str] = None,
    remove_newline: bool = False,
    remove_white: bool = False,
    remove_symbol: bool = False,
    lowercased: bool = False,
    trim_white: bool = False,
) -> str:
    """
    Normalize a scraped string.

    Args:
        s: Raw string (None is treated as empty)
        remove_str: Substring to drop everywhere
        remove_newline: Replace newlines with spaces
        remove_white: Drop every whitespace character
        remove_symbol: Drop everything that is not a word character or space
        lowercased: Lowercase the result
        trim_white: Collapse runs of whitespace and strip the ends

    Returns:
        Normalized string
    """
    formatted = s or ""
    if remove_str:
        formatted = formatted.replace(remove_str, "")
    if remove_newline:
        formatted = re.sub(r"[\r\n]+", " ", formatted)
    if remove_white:
        formatted = re.sub(r"\s+", "", formatted)
    if remove_symbol:
        formatted = re.sub(r"[^\w\s]", "", formatted)
    if lowercased:
        formatted = formatted.lower()
    if trim_white:
        formatted = " ".join(formatted.split())
    return formatted
