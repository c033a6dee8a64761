import io
import re
from typing import List

import markdownify
from bs4 import BeautifulSoup
from rich.console import Console
from rich.text import Text

# Wrapping only needs a console for its defaults, never for output.
_wrap_console = Console(file=io.StringIO(), width=80)


def html_to_text(html: str) -> str:
    """Converts comment HTML from the API into readable plain text."""
    if not html:
        return ""
    text = markdownify.markdownify(html)
    text = re.sub(r"\n{3,}", "\n\n", text)
    return text.strip()


def strip_html(fragment: str) -> str:
    """Plain text of a short HTML fragment such as a story title."""
    if not fragment:
        return ""
    return BeautifulSoup(fragment, "html.parser").get_text()


def reflow(text: str, width: int) -> List[str]:
    """
    Wraps HTML text into plain lines no wider than `width` cells.
    A non-positive width leaves the lines unwrapped.
    """
    plain = html_to_text(text)
    if width <= 0:
        return plain.splitlines() or [""]

    lines = Text(plain).wrap(_wrap_console, width)
    return [line.plain.rstrip() for line in lines] or [""]
