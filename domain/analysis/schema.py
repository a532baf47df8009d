from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class AnalysisRequest(BaseModel):
    sentence: str
    word: str  # assumed to occur in sentence, not checked


class LexiconEntry(BaseModel):
    base_word: str
    translation: str


class DictionaryPage(BaseModel):
    title: str
    wikitext: str


class ExtractedCandidates(BaseModel):
    meanings: List[str] = Field(default_factory=list)  # document order, duplicates kept
    translations: List[str] = Field(default_factory=list)  # deduplicated, first seen


class AnalysisResult(BaseModel):
    """
    Final answer for a word in a sentence.
    Serialized with the same keys the fallback analyzer is asked to return.
    """

    model_config = ConfigDict(populate_by_name=True)

    base_form: str = Field(alias="baseForm", min_length=1)
    translation: str = Field(alias="englishTranslation", min_length=1)
    meaning: str = Field(alias="russianMeaning", min_length=1)


class RawAnalysis(BaseModel):
    """Model reply that could not be parsed into the expected structure."""

    raw: str


class StageTrace(BaseModel):
    """Which sources contributed to a result. Logged, never returned."""

    lemma: Optional[str] = None
    lexicon_hit: bool = False
    dictionary_hit: bool = False
    meanings_found: int = 0
    translations_found: int = 0
    full_fallback: bool = False
