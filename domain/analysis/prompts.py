from typing import List

# Shared morphology rules for every prompt that produces a base form.
BASE_FORM_RULES = (
    "- Nouns: nominative singular. Only if the base form ends with ь, append the gender: (m), (f) or (n).\n"
    "- Adjectives and pronouns: masculine nominative singular, no marker.\n"
    "- Adverbs: return the adverb unchanged. Never turn an adverb into an adjective.\n"
    "- Verbs: infinitive plus exactly one aspect marker matching the usage in the sentence: "
    "(i) imperfective or (p) perfective.\n"
    "- Prepositions with a fixed case: append the case they govern: (+a), (+g), (+d), (+i) or (+p).\n"
)

LEMMA_SYSTEM = "You are a precise Russian linguist. Reply with the base form only."
SELECTION_SYSTEM = (
    "You are a precise Russian-English lexicographer. "
    "Reply with the chosen text only, on one line, without numbering or markup."
)
MEANING_SYSTEM = (
    "You are a Russian lexicographer. Reply with a short Russian definition only."
)
FULL_ANALYSIS_SYSTEM = (
    "You are a Russian language expert. Reply with a valid JSON object only. "
    "No surrounding text or explanation."
)
PHRASE_SYSTEM = "You are a precise Russian linguist. Reply with the base-form phrase only."
VARIATIONS_SYSTEM = (
    "You are a Russian morphology assistant. Reply with a JSON array of strings only. "
    "Detect the input word's primary lemma/part-of-speech and return only inflected forms "
    "(declensions, conjugations, participles, gerunds, etc.) of that exact lemma. "
    "Do NOT include derived words, adjectives/verbs from different lemmas, translations, "
    "explanations, or any surrounding text. Provide canonical Cyrillic forms only."
)


def _numbered(candidates: List[str]) -> str:
    return "\n".join(f"{i}. {c}" for i, c in enumerate(candidates, start=1))


def build_lemma_prompt(sentence: str, word: str) -> str:
    return (
        f'Sentence: "{sentence}"\n'
        f'Word: "{word}"\n\n'
        "Return the dictionary base form of the word as it is used in this sentence, and nothing else.\n"
        f"{BASE_FORM_RULES}"
        "Examples: 'книга', 'дверь (f)', 'новый', 'быстро', 'читать (i)', 'прочитать (p)', 'благодаря (+d)'.\n"
        "Return only the base form, no JSON or explanation."
    )


def build_translation_selection_prompt(
    sentence: str, word: str, base_form: str, translations: List[str]
) -> str:
    return (
        f'Sentence: "{sentence}"\n'
        f'Word: "{word}" (base form: {base_form})\n\n'
        "English translation candidates:\n"
        f"{_numbered(translations)}\n\n"
        "Pick the translation that best fits the word in this sentence. "
        "If several fit equally well, return them joined with '; '.\n"
        "Return one line, without numbers, quotes or markup."
    )


def build_meaning_selection_prompt(
    sentence: str, word: str, base_form: str, meanings: List[str]
) -> str:
    return (
        f'Sentence: "{sentence}"\n'
        f'Word: "{word}" (base form: {base_form})\n\n'
        "Dictionary meanings:\n"
        f"{_numbered(meanings)}\n\n"
        "Pick the single meaning used in this sentence. "
        "Copy it exactly as written, without its number."
    )


def build_meaning_prompt(sentence: str, word: str, base_form: str) -> str:
    return (
        f'Sentence: "{sentence}"\n'
        f'Word: "{word}" (base form: {base_form})\n\n'
        "Give a clear, short Russian definition of this word in the sense used in the sentence. "
        "Do not repeat the word itself and do not add examples."
    )


def build_full_analysis_prompt(sentence: str, word: str) -> str:
    return (
        f"Analyze the Russian word '{word}' as it appears in the sentence: \"{sentence}\"\n\n"
        "Return a JSON object with exactly these three fields:\n"
        "{\n"
        '  "baseForm": "<base form of the word with its marker in brackets where required>",\n'
        '  "englishTranslation": "<English translation of this specific word in this sentence>",\n'
        '  "russianMeaning": "<Russian definition/explanation>"\n'
        "}\n\n"
        "For baseForm:\n"
        f"{BASE_FORM_RULES}"
        "- If the word is already in its base form, still return it with the marker it needs.\n\n"
        "Worked examples:\n"
        '- "Я прочитал книгу", word "прочитал" -> {"baseForm": "прочитать (p)", '
        '"englishTranslation": "read", "russianMeaning": "ознакомиться с содержанием написанного"}\n'
        '- "Закрой дверь", word "дверь" -> {"baseForm": "дверь (f)", '
        '"englishTranslation": "door", "russianMeaning": "проём в стене для входа и выхода"}\n'
        '- "Он быстро бежит", word "быстро" -> {"baseForm": "быстро", '
        '"englishTranslation": "quickly", "russianMeaning": "с большой скоростью"}\n'
        '- "В новом доме", word "новом" -> {"baseForm": "новый", '
        '"englishTranslation": "new", "russianMeaning": "недавно сделанный или появившийся"}\n\n'
        "Return only the JSON object, no other text."
    )


def build_phrase_prompt(sentence: str, words: str) -> str:
    return (
        f'Sentence: "{sentence}"\n'
        f'Selected words: "{words}"\n\n'
        "Return the lemma/base form for each selected token in order, joined by spaces, and nothing else.\n"
        "- Nouns: nominative case, preserving the original number (singular/plural); if ending with ь, append (m), (f), or (n).\n"
        "- Adjectives/pronouns: nominative case, preserving the original gender and number without gender marker.\n"
        "- Verbs: infinitive with aspect marker (i) or (p) that matches usage in the sentence.\n"
        "- Prepositions with fixed case: append (+d), (+a), (+g), (+i), or (+p).\n"
        "Example outputs: 'эта студентка', 'эти спортсмены'\n"
        "Return only the base-form phrase, no JSON or explanation."
    )


def build_variations_prompt(word: str) -> str:
    return (
        f"Provide a JSON array (only the array) of all distinct inflected forms of the exact lemma '{word}'. "
        "Detect the word's primary part of speech and return only morphological variants of that same lemma "
        "(for nouns: all cases singular+plural; for verbs: conjugations and past forms; "
        "for adjectives: gender/number/case forms; etc.). "
        "Do NOT include derived lemmas or unrelated word forms. "
        'Example output: ["мама", "мамы", "маме", ...]. '
        "Return only a JSON array of strings with canonical Cyrillic forms."
    )
