import asyncio
import json
from unittest.mock import MagicMock

import pytest

from common.constants import MEANING_PLACEHOLDER
from core.errors import AnalysisFailedError, ModelCallError
from domain.analysis.prompts import FULL_ANALYSIS_SYSTEM, LEMMA_SYSTEM, MEANING_SYSTEM
from domain.analysis.schema import (
    AnalysisRequest,
    AnalysisResult,
    DictionaryPage,
    LexiconEntry,
    RawAnalysis,
)
from infra.openai.chat_client import OpenAIChatClient
from infra.search.lexicon_repo import SearchLexiconIO
from infra.wiktionary.dictionary_repo import WiktionaryIO
from pipelines.analysis_pipeline import choose_base_form, run_word_analysis

REQUEST = AnalysisRequest(sentence="Я прочитал книгу", word="прочитал")
MEANING = "ознакомиться с содержанием написанного"

PAGE = DictionaryPage(
    title="прочитать",
    wikitext=(
        "==== Значение ====\n"
        "# [[ознакомиться]] с содержанием написанного {{пример|Я прочитал книгу.}}\n"
        "=== Перевод ===\n"
        "{{перев-блок||en=[[read]]|de=[[lesen]]}}\n"
    ),
)
PAGE_WITHOUT_MEANING = DictionaryPage(
    title="прочитать",
    wikitext="=== Перевод ===\n* en: [[read]]\n",
)
FULL_REPLY = json.dumps(
    {
        "baseForm": "прочитать (p)",
        "englishTranslation": "to read",
        "russianMeaning": "прочесть до конца",
    },
    ensure_ascii=False,
)


def _model(
    lemma="прочитать (p)",
    translation="read",
    meaning=MEANING,
    generated="сгенерированное значение",
    full=FULL_REPLY,
):
    """
    Fake chat model answering by stage. A None reply behaves like an unreachable model.
    """

    def complete(system, prompt, temperature):
        if system == LEMMA_SYSTEM:
            reply = lemma
        elif system == FULL_ANALYSIS_SYSTEM:
            reply = full
        elif system == MEANING_SYSTEM:
            reply = generated
        elif "English translation candidates" in prompt:
            reply = translation
        else:
            reply = meaning
        if reply is None:
            raise ModelCallError("unavailable")
        return reply

    model = MagicMock(spec=OpenAIChatClient)
    model.complete.side_effect = complete
    return model


def _lexicon(entry=None):
    lexicon = MagicMock(spec=SearchLexiconIO)
    lexicon.lookup.return_value = entry
    return lexicon


def _dictionary(page=None):
    dictionary = MagicMock(spec=WiktionaryIO)
    dictionary.fetch_page.return_value = page
    return dictionary


def _systems(model):
    return [c.args[0] for c in model.complete.call_args_list]


def _run(model, lexicon, dictionary, request=REQUEST):
    return asyncio.run(run_word_analysis(request, model, lexicon, dictionary))


def test_scenario_dictionary_resolves_translation_and_meaning():
    # Setup
    model = _model()
    lexicon = _lexicon(None)
    dictionary = _dictionary(PAGE)

    # Execute
    result = _run(model, lexicon, dictionary)

    # Assertions
    assert result == AnalysisResult(
        base_form="прочитать (p)", translation="read", meaning=MEANING
    )
    lexicon.lookup.assert_awaited_once_with("прочитать")
    dictionary.fetch_page.assert_awaited_once_with("прочитать")
    assert FULL_ANALYSIS_SYSTEM not in _systems(model)


def test_scenario_lexicon_overrides_displayed_base_form():
    # Setup
    model = _model()
    lexicon = _lexicon(LexiconEntry(base_word="книга", translation="book"))
    dictionary = _dictionary(PAGE)

    # Execute
    result = _run(model, lexicon, dictionary)

    # Assertions
    assert result.base_form == "книга"
    assert result.translation == "book"
    assert result.meaning == MEANING
    # the dictionary is still keyed by the model lemma
    dictionary.fetch_page.assert_awaited_once_with("прочитать")
    prompts = [c.args[1] for c in model.complete.call_args_list]
    assert not any("English translation candidates" in p for p in prompts)


def test_scenario_nothing_structured_uses_full_analysis_unmodified():
    # Setup
    model = _model()
    lexicon = _lexicon(None)
    dictionary = _dictionary(None)

    # Execute
    result = _run(model, lexicon, dictionary)

    # Assertions
    assert result.model_dump(by_alias=True) == json.loads(FULL_REPLY)
    assert _systems(model) == [LEMMA_SYSTEM, FULL_ANALYSIS_SYSTEM]


def test_scenario_no_meaning_section_generates_meaning():
    # Setup
    model = _model()
    lexicon = _lexicon(LexiconEntry(base_word="прочитать", translation="read"))
    dictionary = _dictionary(PAGE_WITHOUT_MEANING)

    # Execute
    result = _run(model, lexicon, dictionary)

    # Assertions
    assert result == AnalysisResult(
        base_form="прочитать", translation="read", meaning="сгенерированное значение"
    )
    assert MEANING_SYSTEM in _systems(model)
    assert FULL_ANALYSIS_SYSTEM not in _systems(model)


def test_scenario_malformed_markup_still_resolves():
    # Setup
    page = DictionaryPage(
        title="прочитать",
        wikitext=(
            "==== Значение ====\n"
            "# [[ознакомиться]] с текстом {{помета|{{вложенный}} незакрытый\n"
            "=== Перевод ===\n"
            "* en: [[read]] }}\n"
        ),
    )
    model = _model(meaning="ознакомиться с текстом")

    # Execute
    result = _run(model, _lexicon(None), _dictionary(page))

    # Assertions
    assert result.translation == "read"
    assert result.meaning == "ознакомиться с текстом"
    _, prompt, _ = model.complete.call_args_list[-1].args
    assert "1. ознакомиться с текстом" in prompt


def test_no_lemma_goes_straight_to_full_analysis():
    model = _model(lemma=None)
    lexicon = _lexicon(None)
    dictionary = _dictionary(PAGE)

    result = _run(model, lexicon, dictionary)

    assert isinstance(result, AnalysisResult)
    assert result.translation == "to read"
    lexicon.lookup.assert_not_awaited()
    dictionary.fetch_page.assert_not_awaited()


def test_failed_translation_selection_discards_partial_results():
    model = _model(translation=None)

    result = _run(model, _lexicon(None), _dictionary(PAGE))

    assert result.model_dump(by_alias=True) == json.loads(FULL_REPLY)


def test_failed_meaning_resolution_uses_placeholder():
    model = _model(meaning=None)

    result = _run(model, _lexicon(None), _dictionary(PAGE))

    assert result.translation == "read"
    assert result.meaning == MEANING_PLACEHOLDER


def test_unparseable_full_analysis_is_wrapped():
    model = _model(lemma=None, full="прочитать - read")

    result = _run(model, _lexicon(None), _dictionary(None))

    assert result == RawAnalysis(raw="прочитать - read")


def test_total_failure_raises_single_error():
    model = _model(lemma=None, full=None)

    with pytest.raises(AnalysisFailedError):
        _run(model, _lexicon(None), _dictionary(None))


def test_blank_input_rejected_before_any_call():
    model = _model()
    lexicon = _lexicon(None)
    dictionary = _dictionary(PAGE)

    with pytest.raises(ValueError):
        _run(model, lexicon, dictionary, AnalysisRequest(sentence="Я прочитал книгу", word=" "))

    model.complete.assert_not_called()
    lexicon.lookup.assert_not_called()


def test_repeated_runs_are_identical():
    first = _run(_model(), _lexicon(None), _dictionary(PAGE))
    second = _run(_model(), _lexicon(None), _dictionary(PAGE))

    assert first == second


def test_choose_base_form():
    assert choose_base_form("прочитать (p)", None) == "прочитать (p)"
    entry = LexiconEntry(base_word="прочесть", translation="read")
    assert choose_base_form("прочитать (p)", entry) == "прочесть"
