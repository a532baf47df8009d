import logging
from typing import Any, List, Union

from common.schemas import PhraseBaseForm
from core.errors import AnalysisFailedError
from core.ports import ModelClient
from domain.analysis.phrase import (
    bracket_sentence,
    parse_variations,
    phrase_base_form,
    word_variations,
)
from domain.analysis.schema import RawAnalysis


async def run_phrase_base_form(
    model: ModelClient, sentence: str, words: str
) -> PhraseBaseForm:
    if not sentence or not sentence.strip():
        raise ValueError("Incorrect sentence")
    if not words or not words.strip():
        raise ValueError("Incorrect words")

    logging.info(f"Phrase base form for phrase: {words!r}")
    base_form = await phrase_base_form(model, sentence, words)
    if not base_form:
        raise AnalysisFailedError(f"No base form for phrase {words!r}")

    return PhraseBaseForm(
        phrase_answer=sentence,
        bracketed_sentence=bracket_sentence(sentence, words, base_form),
        base_form=base_form,
    )


async def run_word_variations(
    model: ModelClient, word: str
) -> Union[List[str], Any, RawAnalysis]:
    if not word or not word.strip():
        raise ValueError("Incorrect word")

    logging.info(f"Word variations for: {word!r}")
    reply = await word_variations(model, word.strip())
    if reply is None or not reply.strip():
        raise AnalysisFailedError(f"No variations for {word!r}")
    return parse_variations(reply)
