import json
import logging
from typing import Any, Optional, Union

import regex as re
from pydantic import ValidationError

from common.constants import TEMPERATURE_FULL_ANALYSIS
from core.errors import ModelCallError
from core.ports import ModelClient
from domain.analysis.prompts import FULL_ANALYSIS_SYSTEM, build_full_analysis_prompt
from domain.analysis.schema import AnalysisResult, RawAnalysis

CODE_FENCE_RE = re.compile(r"^\s*```(?:json)?\s*(.*?)\s*```\s*$", re.DOTALL | re.IGNORECASE)


def strip_code_fence(reply: str) -> str:
    match = CODE_FENCE_RE.match(reply)
    return match.group(1) if match else reply.strip()


def parse_full_analysis(reply: str) -> Union[AnalysisResult, RawAnalysis]:
    """
    Expected reply: {"baseForm": ..., "englishTranslation": ..., "russianMeaning": ...}.
    Anything else is passed back wrapped, never dropped.
    """
    try:
        data: Any = json.loads(strip_code_fence(reply))
    except ValueError:
        logging.warning("Full analysis reply is not JSON, returning raw")
        return RawAnalysis(raw=reply)

    if not isinstance(data, dict):
        logging.warning("Full analysis reply is not a JSON object, returning raw")
        return RawAnalysis(raw=reply)

    try:
        return AnalysisResult.model_validate(
            {
                key: value.strip() if isinstance(value, str) else value
                for key, value in data.items()
            }
        )
    except ValidationError as e:
        logging.warning(f"Full analysis reply has unexpected shape: {e.error_count()} errors")
        return RawAnalysis(raw=reply)


async def analyze_full(
    model: ModelClient, sentence: str, word: str
) -> Optional[Union[AnalysisResult, RawAnalysis]]:
    try:
        reply = await model.complete(
            FULL_ANALYSIS_SYSTEM,
            build_full_analysis_prompt(sentence, word),
            TEMPERATURE_FULL_ANALYSIS,
        )
    except ModelCallError as e:
        logging.error(f"Full analysis failed for {word!r}: {e}")
        return None

    if not reply.strip():
        logging.error(f"Full analysis returned an empty reply for {word!r}")
        return None
    return parse_full_analysis(reply)
