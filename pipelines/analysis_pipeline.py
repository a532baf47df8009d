import logging
from typing import Optional, Tuple, Union

from common.constants import MEANING_PLACEHOLDER
from core.errors import AnalysisFailedError
from core.ports import DictionaryIO, LexiconIO, ModelClient
from domain.analysis.disambiguation import (
    generate_meaning,
    select_meaning,
    select_translation,
)
from domain.analysis.full_analysis import analyze_full
from domain.analysis.lemma import extract_lemma, lemma_search_key
from domain.analysis.schema import (
    AnalysisRequest,
    AnalysisResult,
    ExtractedCandidates,
    LexiconEntry,
    RawAnalysis,
    StageTrace,
)
from domain.wiktionary.markup_extractor import extract_candidates


def validate_request(request: AnalysisRequest) -> None:
    if not request.sentence or not request.sentence.strip():
        raise ValueError("Incorrect sentence")
    if not request.word or not request.word.strip():
        raise ValueError("Incorrect word")


def choose_base_form(lemma: str, lexicon_entry: Optional[LexiconEntry]) -> str:
    """
    Lexicon base word wins for display when present. Lookups always use the model lemma.
    """
    if lexicon_entry is None:
        return lemma
    if lemma_search_key(lexicon_entry.base_word) != lemma_search_key(lemma):
        logging.info(
            f"Lexicon base word {lexicon_entry.base_word!r} differs from lemma {lemma!r}"
        )
    return lexicon_entry.base_word


async def resolve_translation(
    model: ModelClient,
    request: AnalysisRequest,
    base_form: str,
    lexicon_entry: Optional[LexiconEntry],
    candidates: ExtractedCandidates,
) -> Optional[str]:
    if lexicon_entry is not None:
        return lexicon_entry.translation
    if not candidates.translations:
        return None
    return await select_translation(
        model, request.sentence, request.word, base_form, candidates.translations
    )


async def resolve_meaning(
    model: ModelClient,
    request: AnalysisRequest,
    base_form: str,
    candidates: ExtractedCandidates,
) -> str:
    if candidates.meanings:
        meaning = await select_meaning(
            model, request.sentence, request.word, base_form, candidates.meanings
        )
    else:
        meaning = await generate_meaning(model, request.sentence, request.word, base_form)
    return meaning or MEANING_PLACEHOLDER


async def fetch_candidates(
    dictionary: DictionaryIO, search_key: str
) -> Tuple[bool, ExtractedCandidates]:
    page = await dictionary.fetch_page(search_key)
    if page is None:
        return False, ExtractedCandidates()
    return True, extract_candidates(page.wikitext)


async def _full_fallback(
    model: ModelClient, request: AnalysisRequest, trace: StageTrace
) -> Union[AnalysisResult, RawAnalysis]:
    trace.full_fallback = True
    logging.info(f"Falling back to full analysis: {trace.model_dump()}")
    result = await analyze_full(model, request.sentence, request.word)
    if result is None:
        raise AnalysisFailedError(
            f"No analysis could be produced for {request.word!r}"
        )
    return result


async def run_word_analysis(
    request: AnalysisRequest,
    model: ModelClient,
    lexicon: LexiconIO,
    dictionary: DictionaryIO,
) -> Union[AnalysisResult, RawAnalysis]:
    """
    lemma -> lexicon -> dictionary -> translation -> meaning, falling back to a
    single full model analysis when no translation can be resolved.
    Raises AnalysisFailedError only when even the fallback gives nothing.
    """
    validate_request(request)
    trace = StageTrace()

    # 1) Lemma from the model
    lemma = await extract_lemma(model, request.sentence, request.word)
    if lemma is None:
        return await _full_fallback(model, request, trace)
    trace.lemma = lemma
    search_key = lemma_search_key(lemma)

    # 2) Curated lexicon (optional enrichment)
    lexicon_entry = await lexicon.lookup(search_key)
    trace.lexicon_hit = lexicon_entry is not None

    # 3) Dictionary, always keyed by the model lemma
    trace.dictionary_hit, candidates = await fetch_candidates(dictionary, search_key)
    trace.meanings_found = len(candidates.meanings)
    trace.translations_found = len(candidates.translations)

    base_form = choose_base_form(lemma, lexicon_entry)

    # 4) Translation
    translation = await resolve_translation(
        model, request, base_form, lexicon_entry, candidates
    )
    if not translation:
        # Nothing structured resolved a translation; partial results are dropped.
        return await _full_fallback(model, request, trace)

    # 5) Meaning
    meaning = await resolve_meaning(model, request, base_form, candidates)

    logging.info(f"Word analysis resolved: {trace.model_dump()}")
    return AnalysisResult(base_form=base_form, translation=translation, meaning=meaning)
