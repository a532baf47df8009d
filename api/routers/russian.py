import logging

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_dictionary, get_lexicon, get_model_client
from common.schemas import AnalyzeWordRequest, PhraseBaseFormRequest
from core.ports import DictionaryIO, LexiconIO, ModelClient
from domain.analysis.schema import AnalysisRequest, AnalysisResult, RawAnalysis
from pipelines.analysis_pipeline import run_word_analysis
from pipelines.phrase_pipeline import run_phrase_base_form, run_word_variations

router = APIRouter(prefix="/russian")


def _blank(value: str | None) -> bool:
    return value is None or not value.strip()


# Input checks are declared before the collaborator dependencies so they run first.


def analysis_request(body: AnalyzeWordRequest) -> AnalysisRequest:
    if _blank(body.sentence) or _blank(body.word):
        raise HTTPException(
            status_code=400,
            detail="Please provide 'sentence' and 'word' in the JSON body.",
        )
    return AnalysisRequest(sentence=body.sentence, word=body.word)


def phrase_request(body: PhraseBaseFormRequest) -> PhraseBaseFormRequest:
    if _blank(body.sentence) or _blank(body.words):
        raise HTTPException(
            status_code=400,
            detail="Please provide 'sentence' and 'words' in the JSON body.",
        )
    return body


def variations_word(word: str | None = None) -> str:
    if _blank(word):
        raise HTTPException(
            status_code=400, detail="Please provide a word with ?word= query string."
        )
    return word


@router.post("/analyze-word")
async def analyze_word(
    request: AnalysisRequest = Depends(analysis_request),
    model: ModelClient = Depends(get_model_client),
    lexicon: LexiconIO = Depends(get_lexicon),
    dictionary: DictionaryIO = Depends(get_dictionary),
):
    logging.info(f"Analyze word {request.word!r} in sentence {request.sentence!r}")
    result = await run_word_analysis(request, model, lexicon, dictionary)
    if isinstance(result, AnalysisResult):
        return result.model_dump(by_alias=True)
    return result.model_dump()


@router.post("/phrase-base-form")
async def phrase_base_form(
    body: PhraseBaseFormRequest = Depends(phrase_request),
    model: ModelClient = Depends(get_model_client),
):
    result = await run_phrase_base_form(model, body.sentence, body.words)
    return result.model_dump(by_alias=True)


@router.get("/variations")
async def variations(
    word: str = Depends(variations_word),
    model: ModelClient = Depends(get_model_client),
):
    result = await run_word_variations(model, word)
    if isinstance(result, RawAnalysis):
        return result.model_dump()
    return result
