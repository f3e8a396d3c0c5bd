"""
扁平（v1）解析器

三个词典源都按词性块各生成一个 ``DictionaryEntry``，例句为纯字符串，附带英式/美式音频。
v1 结构是共用的，三个解析器放在同一个模块里。
"""

from typing import List, Optional

from loguru import logger

from wordhub.dictionaries.common import (
    CAMBRIDGE_ORIGIN,
    NO_DEFINITIONS_FOUND,
    OXFORD_ORIGIN,
    differs_from,
    make_absolute_url,
    redirect_message,
    suggestion_message,
    unique,
)
from wordhub.dictionaries.document import Document, Node
from wordhub.enums import DictionarySource
from wordhub.models import AudioData, Definition, DictionaryEntry, DictionaryResponse

MAX_RELATED_PHRASES = 10


def _audio(uk: Optional[str], us: Optional[str]) -> Optional[AudioData]:
    if not uk and not us:
        return None
    return AudioData(uk=uk or None, us=us or None)


def _definition(text: str, examples: List[str], context: Optional[str] = None) -> Definition:
    return Definition(definition=text, examples=examples or None, context=context or None)


def _empty(word: str, source: DictionarySource, error: str, **extra) -> DictionaryResponse:
    return DictionaryResponse(word=word, entries=[], source=source.value, error=error, **extra)


# ==================== 剑桥 ====================

def _cambridge_audio(scope: Node) -> Optional[AudioData]:
    uk = scope.select_one('source[src*="/uk_pron/"]')
    us = scope.select_one('source[src*="/us_pron/"]')
    return _audio(
        make_absolute_url(CAMBRIDGE_ORIGIN, uk.attr("src")) if uk is not None else None,
        make_absolute_url(CAMBRIDGE_ORIGIN, us.attr("src")) if us is not None else None,
    )


def parse_cambridge(document: Document, word: str) -> DictionaryResponse:
    source = DictionarySource.CAMBRIDGE
    page_audio = _cambridge_audio(document)

    entries = []
    for element in document.select(".entry-body__el"):
        definitions = []
        for def_block in element.select(".def-block"):
            text = def_block.select_text(".def.ddef_d")
            if text:
                definitions.append(_definition(text, def_block.select_texts(".examp.dexamp")))
        if not definitions:
            continue

        entries.append(
            DictionaryEntry(
                word=word,
                phonetic=element.select_text(".dpron-i .pron.dpron") or None,
                part_of_speech=element.select_text(".pos.dpos") or None,
                definitions=definitions,
                audio=_cambridge_audio(element) or page_audio,
            )
        )

    logger.debug(f"Cambridge v1: {len(entries)} entries for '{word}'")
    if entries:
        return DictionaryResponse(word=word, entries=entries, source=source.value, audio=page_audio)

    redirected = document.select_text(".hw.dhw")
    if differs_from(redirected, word):
        return _empty(word, source, redirect_message(word, source.display_name, redirected))
    return _empty(word, source, NO_DEFINITIONS_FOUND)


# ==================== 牛津 ====================

def _oxford_audio(scope: Node) -> Optional[AudioData]:
    def first(selector: str) -> Optional[str]:
        button = scope.select_one(selector)
        if button is None:
            return None
        return make_absolute_url(OXFORD_ORIGIN, button.attr("data-src-mp3"))

    return _audio(
        first(".sound.audio_play_button.pron-uk"),
        first(".sound.audio_play_button.pron-us"),
    )


def _oxford_definitions(scope: Node, stop_at: Optional[str] = None) -> List[Definition]:
    definitions = []
    for sense in scope.select(".sense", stop_at=stop_at):
        text = sense.select_text(".def")
        if text:
            definitions.append(_definition(text, sense.select_texts(".x"), sense.select_text(".cf")))
    return definitions


def _oxford_synonyms(element: Node) -> Optional[List[str]]:
    block = element.select_one(".synonyms")
    if block is None:
        return None
    synonyms = unique(part.strip() for part in block.text().replace("Synonyms:", "").split(","))
    return synonyms or None


def parse_oxford(document: Document, word: str) -> DictionaryResponse:
    """
    按扁平结构解析牛津页面

    习语单独成为词条，名为 ``"<headword> (<idiom>)"``，词性为 ``idiom``；响应中的 word 取页面词头。
    """
    source = DictionarySource.OXFORD
    page_audio = _oxford_audio(document)
    headword = document.select_text(".headword") or word

    entries = []
    for element in document.select(".entry"):
        entry_headword = element.select_text(".headword") or headword

        for idiom in element.select(".idioms .idm-g"):
            idiom_text = idiom.select_text(".idm")
            definitions = _oxford_definitions(idiom)
            if idiom_text and definitions:
                entries.append(
                    DictionaryEntry(
                        word=f"{entry_headword} ({idiom_text})",
                        part_of_speech="idiom",
                        definitions=definitions,
                        audio=page_audio,
                    )
                )

        definitions = _oxford_definitions(element, stop_at=".idioms")
        if not definitions:
            continue
        entries.append(
            DictionaryEntry(
                word=entry_headword,
                phonetic=element.select_text(".phon") or None,
                part_of_speech=element.select_text(".pos") or None,
                definitions=definitions,
                synonyms=_oxford_synonyms(element),
                audio=_oxford_audio(element) or page_audio,
            )
        )

    logger.debug(f"Oxford v1: {len(entries)} entries for '{word}'")
    if entries:
        return DictionaryResponse(word=headword, entries=entries, source=source.value, audio=page_audio)

    redirected = document.select_text(".headword") or document.select_text(".h")
    if differs_from(redirected, word):
        return _empty(word, source, redirect_message(word, source.display_name, redirected))
    return _empty(word, source, NO_DEFINITIONS_FOUND)


# ==================== 韦氏 ====================

def _webster_definitions(element: Node) -> List[Definition]:
    definitions = []
    for item in element.select(".vg-sseq-entry-item"):
        text = item.select_text(".sb-entry")
        if not text:
            continue
        label = item.select_text(".vg-sseq-entry-item-label")
        if label:
            text = f"{label}. {text}"
        definitions.append(_definition(text, item.select_texts(".in-sentences")))
    return definitions


def parse_merriam_webster(document: Document, word: str) -> DictionaryResponse:
    source = DictionarySource.MERRIAM_WEBSTER

    entries = []
    for element in document.select(".entry-word-section-container"):
        part_of_speech = element.select_text(".important-blue-link")
        if not part_of_speech:
            continue
        definitions = _webster_definitions(element)
        if not definitions:
            continue
        entries.append(
            DictionaryEntry(
                word=word,
                part_of_speech=part_of_speech,
                definitions=definitions,
                synonyms=element.select_texts(".synonyms-antonyms-grid-list li") or None,
            )
        )

    related = []
    for link in document.select("#related-phrases .related-phrases-list-item a"):
        phrase = link.text()
        if phrase and word in phrase:
            related.append(
                DictionaryEntry(
                    word=phrase,
                    definitions=[Definition(definition=f'Related phrase containing "{word}"')],
                )
            )
    entries.extend(related[:MAX_RELATED_PHRASES])

    logger.debug(f"Merriam-Webster v1: {len(entries)} entries for '{word}'")
    if entries:
        return DictionaryResponse(word=word, entries=entries, source=source.value)

    suggestions = unique(document.select_texts(".spelling-suggestions a"))
    if suggestions:
        return _empty(word, source, suggestion_message(suggestions), suggestions=suggestions)
    return _empty(word, source, NO_DEFINITIONS_FOUND)
