import logging
from typing import Optional

import regex as re

from common.constants import LEMMA_TAGS, TEMPERATURE_LEMMA
from core.errors import ModelCallError
from core.ports import ModelClient
from domain.analysis.prompts import LEMMA_SYSTEM, build_lemma_prompt

TAG_RE = re.compile(
    r"\s*\(\s*(?:" + "|".join(re.escape(t) for t in LEMMA_TAGS) + r")\s*\)",
    re.IGNORECASE,
)
QUOTES = "\"'`«»“”"


def clean_model_line(reply: str) -> str:
    """
    First non-empty line of a model reply without surrounding quotes.
    """
    for line in reply.splitlines():
        line = line.strip()
        if len(line) >= 2 and line[0] in QUOTES and line[-1] in QUOTES:
            line = line[1:-1].strip()
        if line:
            return line
    return ""


def lemma_search_key(lemma: str) -> str:
    """
    Bare lookup key: 'прочитать (p)' -> 'прочитать', 'дверь (f)' -> 'дверь'.
    Anything after the first whitespace is dropped as well.
    """
    key = TAG_RE.sub("", lemma).strip()
    if not key:
        return ""
    return key.split()[0]


async def extract_lemma(model: ModelClient, sentence: str, word: str) -> Optional[str]:
    try:
        reply = await model.complete(
            LEMMA_SYSTEM, build_lemma_prompt(sentence, word), TEMPERATURE_LEMMA
        )
    except ModelCallError as e:
        logging.warning(f"Lemma extraction failed for {word!r}: {e}")
        return None

    lemma = clean_model_line(reply)
    if not lemma:
        logging.warning(f"Empty lemma returned for {word!r}")
        return None
    logging.info(f"Lemma for {word!r}: {lemma!r}")
    return lemma
