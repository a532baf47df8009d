"""
Pulls meaning and English translation candidates out of raw ru.wiktionary wikitext.

Everything here is pure and deterministic: same wikitext in, same ordered lists out.
"""

from typing import List, Tuple

import regex as re

from common.constants import (
    ENGLISH_TAG,
    EXAMPLE_TEMPLATE,
    SECTION_MEANING,
    SECTION_TRANSLATION,
)
from domain.analysis.schema import ExtractedCandidates

HEADING_RE = re.compile(r"^(=+)\s*(.+?)\s*\1\s*$")
# "# text", but not "#:", "#*", "##" or "#;" sub-items
DEFINITION_RE = re.compile(r"^#(?![#:*;])\s*(.*)$")
EXAMPLE_RE = re.compile(r"\{\{\s*" + re.escape(EXAMPLE_TEMPLATE), re.IGNORECASE)

COMMENT_RE = re.compile(r"<!--.*?-->", re.DOTALL)
UNTERMINATED_COMMENT_RE = re.compile(r"<!--.*$", re.DOTALL)
TEMPLATE_RE = re.compile(r"\{\{[^{}]*\}\}")
UNTERMINATED_TEMPLATE_RE = re.compile(r"\{\{.*$", re.DOTALL)
STRAY_BRACES_RE = re.compile(r"\{\{|\}\}")
LINK_RE = re.compile(r"\[\[([^\[\]]*)\]\]")
STRAY_BRACKETS_RE = re.compile(r"\[\[|\]\]")
EMPHASIS_RE = re.compile(r"'{2,}")
TRAILING_PIPE_RE = re.compile(r"\s*\|.*$", re.DOTALL)
WHITESPACE_RE = re.compile(r"\s+")
TRAILING_PERIOD_RE = re.compile(r"(?:\s*\.)+$")

# |en=[[read]], [[peruse]]  inside a translation block template
EN_PARAM_RE = re.compile(
    r"\|\s*" + ENGLISH_TAG + r"\s*=\s*((?:\[\[[^\[\]]*\]\]|\{\{[^{}]*\}\}|[^|\n{}\[\]])*)"
)
# * en: [[read]]   or   *{{en}}: [[read]]
EN_BULLET_RE = re.compile(
    r"^\*+\s*(?:\{\{\s*" + ENGLISH_TAG + r"\s*\}\}|" + ENGLISH_TAG + r")\s*:\s*(.+)$",
    re.MULTILINE,
)


def _link_display(inner: str) -> str:
    # [[target|display]] -> display, [[target]] -> target, [[target|]] -> target
    parts = inner.split("|")
    display = parts[-1].strip()
    return display if display else parts[0].strip()


def strip_templates(text: str) -> str:
    """
    Removes {{...}} invocations innermost first until a pass changes nothing.
    Whatever is left unbalanced is cut off rather than looped on.
    """
    while True:
        stripped = TEMPLATE_RE.sub("", text)
        if stripped == text:
            break
        text = stripped
    text = UNTERMINATED_TEMPLATE_RE.sub("", text)
    return STRAY_BRACES_RE.sub("", text)


def unwrap_links(text: str) -> str:
    text = LINK_RE.sub(lambda m: _link_display(m.group(1)), text)
    return STRAY_BRACKETS_RE.sub("", text)


def _clean_once(text: str) -> str:
    text = COMMENT_RE.sub("", text)
    text = UNTERMINATED_COMMENT_RE.sub("", text)
    text = strip_templates(text)
    text = unwrap_links(text)
    text = EMPHASIS_RE.sub("", text)
    text = TRAILING_PIPE_RE.sub("", text)
    text = WHITESPACE_RE.sub(" ", text).strip()
    text = TRAILING_PERIOD_RE.sub("", text).strip()
    return text


def clean_markup(text: str) -> str:
    """
    Reduces a wikitext fragment to plain text. Idempotent.
    No step lengthens the text, so repeating until stable terminates.
    """
    while True:
        cleaned = _clean_once(text)
        if cleaned == text:
            return cleaned
        text = cleaned


def find_sections(wikitext: str, name: str) -> List[str]:
    """
    Bodies of every section headed `name`, in document order.
    A body ends at the next heading of the same or a higher level.
    """
    target = name.strip().lower()
    bodies = []
    current: List[str] | None = None
    level = 0

    for line in wikitext.splitlines():
        heading = HEADING_RE.match(line.strip())
        if heading:
            heading_level = len(heading.group(1))
            if current is not None and heading_level <= level:
                bodies.append("\n".join(current))
                current = None
            if current is None and heading.group(2).strip().lower() == target:
                current = []
                level = heading_level
            elif current is not None:
                current.append(line)
            continue
        if current is not None:
            current.append(line)

    if current is not None:
        bodies.append("\n".join(current))
    return bodies


def extract_meanings(wikitext: str) -> List[str]:
    meanings = []
    for body in find_sections(wikitext, SECTION_MEANING):
        for line in body.splitlines():
            match = DEFINITION_RE.match(line.strip())
            if not match:
                continue
            raw = COMMENT_RE.sub("", match.group(1))
            example = EXAMPLE_RE.search(raw)
            if example:
                raw = raw[: example.start()]
            cleaned = clean_markup(raw)
            if cleaned:
                meanings.append(cleaned)
    return meanings


def _raw_translations(body: str) -> List[Tuple[int, str]]:
    found = []
    for match in EN_PARAM_RE.finditer(body):
        value = match.group(1)
        links = LINK_RE.findall(value)
        if links:
            found.extend((match.start(1), _link_display(link)) for link in links)
        else:
            found.append((match.start(1), value))
    for match in EN_BULLET_RE.finditer(body):
        links = LINK_RE.findall(match.group(1))
        found.extend((match.start(1), _link_display(link)) for link in links)
    # stable sort keeps link order inside one match
    return sorted(found, key=lambda item: item[0])


def extract_translations(wikitext: str) -> List[str]:
    translations = []
    seen = set()
    for body in find_sections(wikitext, SECTION_TRANSLATION):
        for _, raw in _raw_translations(body):
            cleaned = clean_markup(raw)
            if cleaned and cleaned not in seen:
                seen.add(cleaned)
                translations.append(cleaned)
    return translations


def extract_candidates(wikitext: str) -> ExtractedCandidates:
    return ExtractedCandidates(
        meanings=extract_meanings(wikitext),
        translations=extract_translations(wikitext),
    )
