"""
HTML to readable text.

The markup is tokenized by BeautifulSoup's html.parser backend, which keeps
script/style bodies as opaque text and decodes named and numeric entities in
text nodes. The node tree is then walked once:

- script/style/noscript/template regions are skipped with their content
- comments, doctypes, CDATA and processing instructions are skipped
- block elements open and close a line, <li> opens a "- " item
- inline elements become a space
"""

import re
from typing import List

from bs4 import BeautifulSoup
from bs4.element import CData, Comment, Declaration, Doctype, NavigableString, ProcessingInstruction, Tag

DROP_TAGS = {"script", "style", "noscript", "template"}

BLOCK_TAGS = {
    "address", "article", "aside", "blockquote", "body", "caption", "dd", "details",
    "div", "dl", "dt", "fieldset", "figcaption", "figure", "footer", "form",
    "h1", "h2", "h3", "h4", "h5", "h6", "head", "header", "hr", "html", "li",
    "main", "nav", "ol", "p", "pre", "section", "summary", "table", "tbody",
    "td", "tfoot", "th", "thead", "title", "tr", "ul",
}

SKIPPED_STRINGS = (CData, Comment, Declaration, Doctype, ProcessingInstruction)

_WS_RE = re.compile(r"\s+")


def _walk(soup: BeautifulSoup) -> str:
    out: List[str] = []
    # (node, entering); closing events are pushed under a tag's children
    stack = [(child, True) for child in reversed(list(soup.children))]

    while stack:
        node, entering = stack.pop()

        if isinstance(node, Tag):
            name = (node.name or "").lower()
            if not entering:
                out.append("\n" if name in BLOCK_TAGS else " ")
                continue
            if name in DROP_TAGS:
                continue
            if name == "br":
                out.append("\n")
                continue

            if name == "li":
                out.append("\n- ")
            elif name in BLOCK_TAGS:
                out.append("\n")
            else:
                out.append(" ")

            stack.append((node, False))
            stack.extend((child, True) for child in reversed(list(node.children)))

        elif isinstance(node, NavigableString) and not isinstance(node, SKIPPED_STRINGS):
            out.append(str(node))

    return "".join(out)


def html_to_text(markup: str) -> str:
    """Visible text of an HTML document, one non-empty line per block."""
    soup = BeautifulSoup(markup.replace("\0", ""), "html.parser")
    text = _walk(soup)

    # Decoded "&lt;script&gt;" must not come back out as markup
    text = text.replace("<", "").replace(">", "")

    lines = (_WS_RE.sub(" ", line).strip() for line in text.split("\n"))
    return "\n".join(line for line in lines if line)
