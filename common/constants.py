# OpenAI
DEFAULT_OPENAI_BASE_URL = "https://api.openai.com/v1"
DEFAULT_OPENAI_MODEL = "gpt-4o-mini"
MODEL_TIMEOUT_S = 120.0
MODEL_MAX_ATTEMPTS = 2
MODEL_BACKOFF_S = 0.5

# Sampling
TEMPERATURE_LEMMA = 0.1
TEMPERATURE_SELECTION = 0.0
TEMPERATURE_MEANING = 0.2
TEMPERATURE_FULL_ANALYSIS = 0.0
TEMPERATURE_VARIATIONS = 0.0

# Azure Cognitive Search (curated lexicon)
DEFAULT_SEARCH_INDEX = "russian-words"
SEARCH_API_VERSION = "2023-11-01"
LEXICON_BASE_WORD_FIELD = "BaseWord"
LEXICON_TRANSLATION_FIELD = "Translation"
LEXICON_TIMEOUT_S = 30.0

# Wiktionary
DEFAULT_WIKTIONARY_API_URL = "https://ru.wiktionary.org/w/api.php"
WIKTIONARY_MISSING_PAGE_ID = "-1"
WIKTIONARY_TIMEOUT_S = 30.0
WIKTIONARY_USER_AGENT = "russian-word-analysis/0.1 (flashcards)"

# Wikitext sections
SECTION_MEANING = "Значение"
SECTION_TRANSLATION = "Перевод"
EXAMPLE_TEMPLATE = "пример"
ENGLISH_TAG = "en"

# Lemma tags: aspect, gender, case government, plus older Cyrillic variants
LEMMA_TAGS = (
    "i",
    "p",
    "m",
    "f",
    "n",
    "+a",
    "+g",
    "+d",
    "+i",
    "+p",
    "св",
    "нсв",
    "м",
    "ж",
    "ср",
)

MEANING_PLACEHOLDER = "Значение не найдено"
TRANSLATION_SEPARATOR = "; "
