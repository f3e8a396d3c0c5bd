"""
韦氏词典解析器（v2 schema）

每个 ``.entry-word-section-container`` 是一个同形异义词。``1a(2)`` 这样的义项编号
会拆成各级编号；发音按钮的音频要么直接给出，要么是媒体服务器上的 file/dir 组合。
"""

import re
from typing import Dict, List, Optional, Tuple

from loguru import logger

from wordhub.dictionaries.common import (
    MERRIAM_WEBSTER_ORIGIN,
    NO_DEFINITIONS_FOUND,
    make_absolute_url,
    suggestion_message,
    unique,
)
from wordhub.dictionaries.document import Document, Node
from wordhub.enums import DictionarySource
from wordhub.models import (
    MerriamDefinition,
    MerriamDictionaryEntry,
    MerriamEtymology,
    MerriamExample,
    MerriamLabel,
    MerriamPartOfSpeechSection,
    MerriamRelatedPhrase,
    MerriamSenseNumber,
    MerriamWebsterDictionaryResponse,
    MerriamWebsterPronunciation,
    MerriamWordForm,
)

SOURCE = DictionarySource.MERRIAM_WEBSTER

MEDIA_ORIGIN = "https://media.merriam-webster.com"

ENTRY = ".entry-word-section-container"
PART_OF_SPEECH = ".important-blue-link"
PRONUNCIATION_BUTTON = ".play-pron-v2"
DEFINITION_ITEM = ".vg-sseq-entry-item"

EXAMPLE_SELECTORS = (
    ".in-sentences",
    ".examples li",
    ".freshness-examples li",
    ".example-sentences .t",
)

LABEL_TYPES = (
    (".subject-label", "subject"),
    (".usage-label", "register"),
    (".gram-label", "grammar"),
)

_SENSE_MAIN = re.compile(r"^(\d+)")
_SENSE_LETTER = re.compile(r"(\d+)([a-z])")
_SENSE_SUB_NUMBER = re.compile(r"\((\d+)\)")
_ONCLICK_MP3 = re.compile(r"[\"'](https?://[^\"']+\.mp3)[\"']", re.IGNORECASE)
_ORIGIN_LANGUAGE = re.compile(r"from\s+((?:(?:Old|Middle|Late|Early|Medieval|Vulgar)\s+)?[A-Z][a-z]+)")
_FIRST_USE = re.compile(r"first\s+known\s+use\s+in\s+(\d{4})", re.IGNORECASE)


def parse_sense_number(label: str) -> Optional[MerriamSenseNumber]:
    """
    拆分 ``1a(2)`` 这样的义项编号

    ``full_form`` 原样保留编号；其余部分尽量解析，解析不出时 ``main`` 取整个编号。
    """
    label = label.strip()
    if not label:
        return None

    main = _SENSE_MAIN.search(label)
    letter = _SENSE_LETTER.search(label)
    sub_number = _SENSE_SUB_NUMBER.search(label)
    return MerriamSenseNumber(
        main=main.group(1) if main else label,
        sub_letter=letter.group(2) if letter else None,
        sub_number=sub_number.group(1) if sub_number else None,
        full_form=label,
    )


# ---------- 发音 ----------

def audio_url(button: Node) -> Optional[str]:
    """发音按钮的音频：data-audio、data-file/data-dir 组合，或 onclick 中的 mp3"""
    direct = button.attr("data-audio")
    if direct:
        return make_absolute_url(MERRIAM_WEBSTER_ORIGIN, direct)

    data_file = button.attr("data-file")
    data_dir = button.attr("data-dir")
    if data_file and data_dir:
        lang = (button.attr("data-lang") or "en_us").replace("_", "/", 1)
        return f"{MEDIA_ORIGIN}/audio/prons/{lang}/mp3/{data_dir}/{data_file}.mp3"

    onclick = button.attr("onclick")
    if onclick:
        match = _ONCLICK_MP3.search(onclick)
        if match:
            return match.group(1)
    return None


def _button_form(button: Node) -> Optional[str]:
    """按钮所属的屈折形式，取其 ``.prt-a`` 外层前紧挨着的 ``.if``"""
    wrapper = button.closest(".prt-a")
    if wrapper is None:
        return None
    label = wrapper.previous_sibling(".if")
    if label is None:
        return None
    return label.text() or None


def extract_pronunciation(element: Node) -> Optional[MerriamWebsterPronunciation]:
    buttons = element.select(PRONUNCIATION_BUTTON)
    if not buttons:
        return None

    written = buttons[0].own_text() or element.select_text(".mw, .if")
    if not written:
        return None

    pronunciation = MerriamWebsterPronunciation(written=written)

    audio: List[Tuple[Optional[str], str]] = []
    seen_urls = set()
    for button in buttons:
        url = audio_url(button)
        if not url or url in seen_urls:
            continue
        seen_urls.add(url)
        audio.append((_button_form(button), url))

    if audio:
        pronunciation.audio_url = audio[0][1]
    if len(audio) > 1:
        word_forms = [MerriamWordForm(form=form, audio_url=url) for form, url in audio if form]
        if word_forms:
            pronunciation.word_forms = word_forms

    pronunciation.phonetic = element.select_text(".ipa") or written
    return pronunciation


# ---------- 释义 ----------

def extract_examples(item: Node) -> List[MerriamExample]:
    examples = []
    seen = set()
    for selector in EXAMPLE_SELECTORS:
        for node in item.select(selector):
            if node in seen:
                continue
            seen.add(node)
            text = node.text()
            if not text:
                continue

            example = MerriamExample(text=text)
            attribution = node.select_text(".quote-author, .freshness-example-cite")
            if attribution:
                example.attribution = attribution
            tab = node.closest(".freshness-tab")
            if tab is not None and tab.attr("data-tab"):
                example.type = tab.attr("data-tab")
            examples.append(example)
    return examples


def extract_labels(item: Node) -> List[MerriamLabel]:
    labels = []
    for selector, label_type in LABEL_TYPES:
        text = " ".join(item.select_texts(selector))
        if text:
            labels.append(MerriamLabel(type=label_type, text=text))
    return labels


def _definition_text(item: Node) -> str:
    texts = item.select_texts(".dtText")
    text = " ".join(texts) if texts else item.select_text(".sb-entry")
    return text.strip(": ")


def extract_definition(item: Node) -> Optional[MerriamDefinition]:
    text = _definition_text(item)
    if not text:
        return None

    definition = MerriamDefinition(text=text)

    sense_number = parse_sense_number(item.select_text(".vg-sseq-entry-item-label"))
    if sense_number:
        definition.sense_number = sense_number

    examples = extract_examples(item)
    if examples:
        definition.examples = examples

    labels = extract_labels(item)
    if labels:
        definition.labels = labels

    usage_notes = item.select_texts(".usage-note")
    if usage_notes:
        definition.usage_notes = usage_notes

    synonyms = item.select_texts(".synonyms-list li")
    if synonyms:
        definition.synonyms = synonyms

    antonyms = item.select_texts(".antonyms-list li")
    if antonyms:
        definition.antonyms = antonyms

    return definition


def extract_definitions(element: Node) -> List[MerriamDefinition]:
    definitions = []
    for item in element.select(DEFINITION_ITEM):
        definition = extract_definition(item)
        if definition is not None:
            definitions.append(definition)
    return definitions


# ---------- 词条 ----------

def extract_etymology(element: Node) -> Optional[MerriamEtymology]:
    text = element.select_text(".et")
    if not text:
        return None
    etymology = MerriamEtymology(text=text)
    language = _ORIGIN_LANGUAGE.search(text)
    if language:
        etymology.language = language.group(1)
    first_use = _FIRST_USE.search(text)
    if first_use:
        etymology.first_use = first_use.group(1)
    return etymology


def extract_section(element: Node, part_of_speech: str) -> Optional[MerriamPartOfSpeechSection]:
    definitions = extract_definitions(element)
    if not definitions:
        return None

    section = MerriamPartOfSpeechSection(part_of_speech=part_of_speech, definitions=definitions)
    if "verb" in part_of_speech:
        section.functional = "auxiliary" in part_of_speech

    inflections = [part.strip() for part in element.select_text(".vg-ins").split(";") if part.strip()]
    if inflections:
        section.inflections = inflections
    return section


def extract_other_forms(element: Node) -> Dict[str, str]:
    forms = {}
    for node in element.select(".inflected-form"):
        form_type = node.select_text(".if-label")
        value = node.select_text(".if")
        if form_type and value:
            forms[form_type] = value
    return forms


def extract_related_phrases(document: Document) -> List[MerriamRelatedPhrase]:
    """页面 ``#phrases`` 区域列出的短语，每个短语后面跟着它的 ``.vg`` 释义块"""
    phrases = []
    for drp in document.select("#phrases .drp"):
        phrase_text = drp.text()
        if not phrase_text:
            continue
        block = drp.next_sibling(".vg")
        if block is None:
            continue
        definition = block.select_text(".sb-entry").strip(": ")
        if not definition:
            continue

        phrase = MerriamRelatedPhrase(phrase=phrase_text, definition=definition)
        examples = [MerriamExample(text=text) for text in block.select_texts(".in-sentences")]
        if examples:
            phrase.examples = examples
        phrases.append(phrase)
    return phrases


def extract_entry(element: Node, index: int, word: str) -> Optional[MerriamDictionaryEntry]:
    """单个同形异义词；没有词性或没有释义时返回 None"""
    part_of_speech = element.select_text(PART_OF_SPEECH)
    if not part_of_speech:
        return None

    section = extract_section(element, part_of_speech)
    if section is None:
        return None

    entry = MerriamDictionaryEntry(
        word=element.select_text(".hword") or word,
        homonym_number=index + 1,
        part_of_speech_sections=[section],
    )

    pronunciation = extract_pronunciation(element)
    if pronunciation:
        entry.pronunciation = pronunciation

    variety = element.select_text(".language-label")
    if variety:
        entry.variety = variety

    functional_label = element.select_text(".function-label")
    if functional_label and functional_label != part_of_speech:
        entry.functional_label = functional_label

    etymology = extract_etymology(element)
    if etymology:
        entry.etymology = etymology

    first_known_use = element.select_text(".first-known-date")
    if first_known_use:
        entry.first_known_use = first_known_use

    other_forms = extract_other_forms(element)
    if other_forms:
        entry.other_forms = other_forms

    return entry


def extract_suggestions(document: Document) -> List[str]:
    return unique(document.select_texts(".spelling-suggestions a"))


def parse(document: Document, word: str) -> MerriamWebsterDictionaryResponse:
    """把已抓取的页面组装为 v2 韦氏响应"""
    entries = []
    for index, element in enumerate(document.select(ENTRY)):
        entry = extract_entry(element, index, word)
        if entry is not None:
            entries.append(entry)

    logger.debug(f"Merriam-Webster: {len(entries)} entries for '{word}'")

    if entries:
        # 页面级区域，只挂在第一个词条上
        related_phrases = extract_related_phrases(document)
        if related_phrases:
            entries[0].related_phrases = related_phrases
        return MerriamWebsterDictionaryResponse(word=word, entries=entries, source=SOURCE.value)

    suggestions = extract_suggestions(document)
    if suggestions:
        return MerriamWebsterDictionaryResponse(
            word=word,
            entries=[],
            source=SOURCE.value,
            error=suggestion_message(suggestions),
            suggestions=suggestions,
        )
    return MerriamWebsterDictionaryResponse(word=word, entries=[], source=SOURCE.value, error=NO_DEFINITIONS_FOUND)
