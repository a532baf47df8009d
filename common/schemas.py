from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

# ---------- HTTP request bodies ----------


class AnalyzeWordRequest(BaseModel):
    sentence: Optional[str] = None
    word: Optional[str] = None


class PhraseBaseFormRequest(BaseModel):
    sentence: Optional[str] = None
    words: Optional[str] = None  # selected phrase, e.g. "эти спортсмены"


# ---------- Responses ----------


class PhraseBaseForm(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    phrase_answer: str = Field(alias="phraseAnswer")
    bracketed_sentence: str = Field(alias="bracketedSentence")
    base_form: str = Field(alias="baseForm")
