from __future__ import annotations

import re
from dataclasses import dataclass

UNTITLED = "Untitled"
DESCRIPTION_LIMIT = 120
MARKUP_EXTENSIONS = (".html", ".htm")

TAG_RE = re.compile(r"<[^>]+>")
SPACE_RE = re.compile(r"\s+")
H1_RE = re.compile(r"<h1\b[^>]*>([\s\S]*?)</h1>", re.IGNORECASE)
TITLE_RE = re.compile(r"<title\b[^>]*>([\s\S]*?)</title>", re.IGNORECASE)
PARAGRAPH_RE = re.compile(r"<p(?:\s[^>]*)?>([\s\S]*?)</p>", re.IGNORECASE)
META_RE = re.compile(r"""<meta\b(?:[^>"']|"[^"]*"|'[^']*')*>""", re.IGNORECASE)
ATTR_RE = re.compile(r"""([\w:-]+)\s*=\s*(?:"([^"]*)"|'([^']*)')""")


@dataclass(frozen=True)
class Post:
    filename: str
    url: str
    title: str
    description: str
    date: str


def strip_tags(text: str) -> str:
    """Replace every tag with a space, then collapse and trim whitespace."""
    return SPACE_RE.sub(" ", TAG_RE.sub(" ", text)).strip()


def first_match(text: str, pattern: re.Pattern) -> str:
    match = pattern.search(text)
    return match.group(1) if match else ""


def slug_from_filename(filename: str) -> str:
    lowered = filename.lower()
    for ext in MARKUP_EXTENSIONS:
        if lowered.endswith(ext):
            return filename[: -len(ext)]
    return filename


def url_from_filename(filename: str) -> str:
    return f"/{slug_from_filename(filename)}"


def meta_attributes(tag: str) -> dict:
    attrs = {}
    for match in ATTR_RE.finditer(tag):
        value = match.group(2) if match.group(2) is not None else match.group(3)
        attrs.setdefault(match.group(1).lower(), value)
    return attrs


def extract_title(html_text: str) -> str:
    for pattern in (H1_RE, TITLE_RE):
        title = strip_tags(first_match(html_text, pattern))
        if title:
            return title
    return UNTITLED


def extract_description(html_text: str) -> str:
    for tag in META_RE.findall(html_text):
        attrs = meta_attributes(tag)
        if (attrs.get("name") or "").lower() != "description":
            continue
        content = (attrs.get("content") or "").strip()
        if content:
            return content
    paragraph = first_match(html_text, PARAGRAPH_RE)
    return strip_tags(paragraph)[:DESCRIPTION_LIMIT]


def extract_metadata(html_text: str) -> tuple[str, str]:
    """Return ``(title, description)`` for a post document.

    The title is the first ``<h1>``, then ``<title>``, then ``UNTITLED``.
    The description is ``<meta name="description">``, then the first
    paragraph cut to ``DESCRIPTION_LIMIT`` characters, then ``""``.
    """
    return extract_title(html_text), extract_description(html_text)
