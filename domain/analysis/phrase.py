import json
import logging
from typing import Any, List, Optional, Union

from common.constants import TEMPERATURE_LEMMA, TEMPERATURE_VARIATIONS
from core.errors import ModelCallError
from core.ports import ModelClient
from domain.analysis.full_analysis import strip_code_fence
from domain.analysis.lemma import clean_model_line
from domain.analysis.prompts import (
    PHRASE_SYSTEM,
    VARIATIONS_SYSTEM,
    build_phrase_prompt,
    build_variations_prompt,
)
from domain.analysis.schema import RawAnalysis


def bracket_sentence(sentence: str, phrase: str, base_form_phrase: str) -> str:
    """
    Replaces the first exact occurrence of the phrase with "(base form)".
    If the phrase is not in the sentence the base form is appended instead.
    """
    index = sentence.find(phrase)
    if index < 0:
        return f"{sentence} ({base_form_phrase})"
    return f"{sentence[:index]}({base_form_phrase}){sentence[index + len(phrase):]}"


async def phrase_base_form(model: ModelClient, sentence: str, words: str) -> Optional[str]:
    try:
        reply = await model.complete(
            PHRASE_SYSTEM, build_phrase_prompt(sentence, words), TEMPERATURE_LEMMA
        )
    except ModelCallError as e:
        logging.error(f"Phrase base form failed for {words!r}: {e}")
        return None
    return clean_model_line(reply) or None


def parse_variations(reply: str) -> Union[List[str], Any, RawAnalysis]:
    try:
        data = json.loads(strip_code_fence(reply))
    except ValueError:
        return RawAnalysis(raw=reply)
    if isinstance(data, list) and all(isinstance(form, str) for form in data):
        forms = []
        for form in data:
            form = form.strip()
            if form and form not in forms:
                forms.append(form)
        return forms
    return data


async def word_variations(model: ModelClient, word: str) -> Optional[str]:
    try:
        return await model.complete(
            VARIATIONS_SYSTEM, build_variations_prompt(word), TEMPERATURE_VARIATIONS
        )
    except ModelCallError as e:
        logging.error(f"Word variations failed for {word!r}: {e}")
        return None
