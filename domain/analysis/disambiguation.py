import logging
from typing import List, Optional

import regex as re

from common.constants import (
    TEMPERATURE_MEANING,
    TEMPERATURE_SELECTION,
    TRANSLATION_SEPARATOR,
)
from core.errors import ModelCallError
from core.ports import ModelClient
from domain.analysis.lemma import clean_model_line
from domain.analysis.prompts import (
    MEANING_SYSTEM,
    SELECTION_SYSTEM,
    build_meaning_prompt,
    build_meaning_selection_prompt,
    build_translation_selection_prompt,
)

# "2. text", "2) text", "[2] text"
NUMBER_PREFIX_RE = re.compile(r"^\s*(?:\[\d+\]|\d+\s*[.)])\s*")
# "2", "2.", "[2]"
BARE_INDEX_RE = re.compile(r"^\s*\[?(\d+)\]?\s*[.)]?\s*$")


def _strip_numbering(text: str) -> str:
    return NUMBER_PREFIX_RE.sub("", text).strip()


def _resolve_choice(line: str, candidates: Optional[List[str]]) -> str:
    """
    A reply that is only a candidate number stands for that candidate.
    """
    if candidates:
        index = BARE_INDEX_RE.match(line)
        if index and 1 <= int(index.group(1)) <= len(candidates):
            return candidates[int(index.group(1)) - 1]
    return _strip_numbering(line)


def _normalize_joined(text: str) -> str:
    parts = [p.strip() for p in re.split(r"\s*;\s*", text)]
    return TRANSLATION_SEPARATOR.join(p for p in parts if p)


async def _ask(
    model: ModelClient,
    system: str,
    prompt: str,
    temperature: float,
    stage: str,
    candidates: Optional[List[str]] = None,
) -> Optional[str]:
    try:
        reply = await model.complete(system, prompt, temperature)
    except ModelCallError as e:
        logging.warning(f"{stage} failed: {e}")
        return None
    line = _resolve_choice(clean_model_line(reply), candidates)
    if not line:
        logging.warning(f"{stage} returned nothing")
        return None
    return line


async def select_translation(
    model: ModelClient,
    sentence: str,
    word: str,
    base_form: str,
    translations: List[str],
) -> Optional[str]:
    """
    Best fitting translation, or several joined with "; " when equally apt.
    """
    if not translations:
        return None
    prompt = build_translation_selection_prompt(sentence, word, base_form, translations)
    choice = await _ask(
        model,
        SELECTION_SYSTEM,
        prompt,
        TEMPERATURE_SELECTION,
        "Translation selection",
        translations,
    )
    if choice is None:
        return None
    return _normalize_joined(choice) or None


async def select_meaning(
    model: ModelClient,
    sentence: str,
    word: str,
    base_form: str,
    meanings: List[str],
) -> Optional[str]:
    if not meanings:
        return None
    prompt = build_meaning_selection_prompt(sentence, word, base_form, meanings)
    return await _ask(
        model, SELECTION_SYSTEM, prompt, TEMPERATURE_SELECTION, "Meaning selection", meanings
    )


async def generate_meaning(
    model: ModelClient, sentence: str, word: str, base_form: str
) -> Optional[str]:
    # Used only when the dictionary gave no meanings. Not the full-analysis fallback.
    prompt = build_meaning_prompt(sentence, word, base_form)
    return await _ask(
        model, MEANING_SYSTEM, prompt, TEMPERATURE_MEANING, "Meaning generation"
    )
