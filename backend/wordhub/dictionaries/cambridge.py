"""
剑桥词典解析器（v2 schema）

解析 dictionary.cambridge.org/dictionary/english/<word> 页面。每个 ``.entry-body__el``
块对应一个词性；词头拼写相同的块合并为一个词条，包含多个释义组。
"""

import re
from typing import List, Optional

from loguru import logger

from wordhub.dictionaries.common import (
    CAMBRIDGE_ORIGIN,
    NO_DEFINITIONS_FOUND,
    differs_from,
    make_absolute_url,
    redirect_message,
    unique,
)
from wordhub.dictionaries.document import Document, Node
from wordhub.enums import DictionarySource
from wordhub.models import (
    CambridgeDefGroup,
    CambridgeDefinition,
    CambridgeDictionaryEntry,
    CambridgeDictionaryResponse,
    CambridgeExample,
    CambridgeLevel,
    CambridgePronunciation,
    CambridgeRelatedPhrase,
    RegionVariation,
)

SOURCE = DictionarySource.CAMBRIDGE

ENTRY_BLOCK = ".entry-body__el"
HEADWORD = ".hw.dhw"
PART_OF_SPEECH = ".pos.dpos"
DEF_BLOCK = ".def-block"
DEFINITION_TEXT = ".def.ddef_d"
EXAMPLE = ".examp.dexamp"
TRANSLATION = ".trans.dtrans"

IDIOM_BLOCKS = ".idiom-block"
PHRASAL_VERB_BLOCKS = ".pv-block, .phrasal_verb-block"
PHRASE_BLOCKS = ".phrase-block"
# 这些块里的释义属于短语，不属于词头
RELATED_BLOCKS = ", ".join([IDIOM_BLOCKS, PHRASAL_VERB_BLOCKS, PHRASE_BLOCKS])

LEVEL_PATTERN = re.compile(r"\b[ABC][12]\b")


def absolute(url: Optional[str]) -> Optional[str]:
    return make_absolute_url(CAMBRIDGE_ORIGIN, url)


def extract_pronunciation(element: Node) -> Optional[CambridgePronunciation]:
    """词条块的英式/美式音标和发音"""
    pronunciation = CambridgePronunciation()

    uk_ipa = element.select_text(".uk .pron.dpron", stop_at=RELATED_BLOCKS)
    us_ipa = element.select_text(".us .pron.dpron", stop_at=RELATED_BLOCKS)
    if uk_ipa:
        pronunciation.uk_ipa = uk_ipa
    if us_ipa:
        pronunciation.us_ipa = us_ipa

    for region in ("uk", "us"):
        source = (
            element.select_one(f'.{region} source[src*="/{region}_pron/"]', stop_at=RELATED_BLOCKS)
            or element.select_one(f'source[src*="/{region}_pron/"]', stop_at=RELATED_BLOCKS)
        )
        if source is None:
            continue
        url = absolute(source.attr("src"))
        if url:
            setattr(pronunciation, f"{region}_audio_url", url)

    if not pronunciation.model_dump(exclude_none=True):
        return None
    return pronunciation


def extract_level(element: Node) -> Optional[CambridgeLevel]:
    """从块中的等级/指导词标记提取 CEFR 等级 (A1-C2)"""
    texts = element.select_texts(".dxref, .dgc", stop_at=RELATED_BLOCKS)
    level_text = " ".join(texts)
    if not level_text:
        return None
    match = LEVEL_PATTERN.search(level_text)
    if not match:
        return None
    return CambridgeLevel(code=match.group(0), description=level_text)


def extract_examples(def_block: Node) -> List[CambridgeExample]:
    examples = []
    for examp in def_block.select(EXAMPLE):
        text = examp.select_text(".eg, .deg") or examp.text()
        if not text:
            continue
        example = CambridgeExample(text=text)
        translation = examp.next_sibling(TRANSLATION) or examp.select_one(TRANSLATION)
        if translation is not None and translation.text():
            example.translation = translation.text()
        examples.append(example)
    return examples


def extract_related_phrases(element: Node, selector: str) -> List[CambridgeRelatedPhrase]:
    """匹配 ``selector`` 的块中的习语、短语动词或短语"""
    phrases = []
    for block in element.select(selector):
        phrase_text = block.select_text(".phrase-title, .phr")
        definition = _definition_text(block)
        if not phrase_text or not definition:
            continue

        phrase = CambridgeRelatedPhrase(phrase=phrase_text, definition=definition)
        example = block.select_text(EXAMPLE)
        if example:
            phrase.example = example
        link = block.select_one("a[href]")
        if link is not None:
            phrase.link = absolute(link.attr("href"))
        phrases.append(phrase)
    return phrases


def _definition_text(block: Node) -> str:
    return block.select_text(DEFINITION_TEXT).rstrip(":").strip()


def extract_definition(def_block: Node) -> Optional[CambridgeDefinition]:
    text = _definition_text(def_block)
    if not text:
        return None

    definition = CambridgeDefinition(text=text)

    examples = extract_examples(def_block)
    if examples:
        definition.examples = examples

    level = extract_level(def_block)
    if level:
        definition.level = level

    domain = def_block.select_text(".domain.ddomain")
    if domain:
        definition.domain = domain

    register = def_block.select_text(".register.dreg")
    if register:
        definition.register_label = register

    grammar = def_block.select_text(".gram.dgram")
    if grammar:
        definition.grammar = grammar

    labels = def_block.select_texts(".usage.dusage")
    if labels:
        definition.labels = labels

    alternates = unique(def_block.select_texts(".var.dvar"))
    if alternates:
        definition.alternates = alternates

    uk_variation = def_block.select_text(".uk .dvar")
    us_variation = def_block.select_text(".us .dvar")
    if uk_variation or us_variation:
        definition.region_variation = RegionVariation(
            uk=uk_variation or None,
            us=us_variation or None,
        )

    return definition


def extract_definitions(element: Node) -> List[CambridgeDefinition]:
    definitions = []
    for def_block in element.select(DEF_BLOCK, stop_at=RELATED_BLOCKS):
        definition = extract_definition(def_block)
        if definition is not None:
            definitions.append(definition)
    return definitions


def extract_def_group(element: Node) -> Optional[CambridgeDefGroup]:
    """
    单个词条块的释义组

    块没有词性或没有带文本的释义时返回 None。
    """
    part_of_speech = element.select_text(PART_OF_SPEECH, stop_at=RELATED_BLOCKS)
    if not part_of_speech:
        return None

    definitions = extract_definitions(element)
    if not definitions:
        return None

    group = CambridgeDefGroup(part_of_speech=part_of_speech, definitions=definitions)

    header = element.select_one(".pos-header")
    if header is not None:
        grammar_info = header.select_text(".gram.dgram")
        if grammar_info:
            group.grammar_info = grammar_info

        region_note = header.select_text(".region.dregion")
        if region_note:
            group.region_note = region_note

        group_level = extract_level(header)
        if group_level:
            group.group_level = group_level

    return group


def _extend(entry: CambridgeDictionaryEntry, field: str, items: list) -> None:
    if not items:
        return
    current = getattr(entry, field) or []
    setattr(entry, field, current + items)


def extract_entries(document: Document, word: str) -> List[CambridgeDictionaryEntry]:
    entries: List[CambridgeDictionaryEntry] = []

    for element in document.select(ENTRY_BLOCK):
        group = extract_def_group(element)
        if group is None:
            continue

        entry_word = element.select_text(HEADWORD, stop_at=RELATED_BLOCKS) or word
        entry = next((e for e in entries if e.word.lower() == entry_word.lower()), None)
        if entry is None:
            entry = CambridgeDictionaryEntry(word=entry_word)
            entries.append(entry)

        if entry.pronunciation is None:
            entry.pronunciation = extract_pronunciation(element)

        entry.def_groups.append(group)

        _extend(entry, "idioms", extract_related_phrases(element, IDIOM_BLOCKS))
        _extend(entry, "phrasal_verbs", extract_related_phrases(element, PHRASAL_VERB_BLOCKS))
        _extend(entry, "related_phrases", extract_related_phrases(element, PHRASE_BLOCKS))

        alternative_forms = unique((entry.alternative_forms or []) + element.select_texts(".var.dvar"))
        if alternative_forms:
            entry.alternative_forms = alternative_forms

    return entries


def parse(document: Document, word: str) -> CambridgeDictionaryResponse:
    """把已抓取的页面组装为 v2 剑桥响应"""
    entries = extract_entries(document, word)
    logger.debug(f"Cambridge: {len(entries)} entries for '{word}'")

    if entries:
        return CambridgeDictionaryResponse(word=word, entries=entries, source=SOURCE.value)

    redirected = document.select_text(HEADWORD)
    if differs_from(redirected, word):
        error = redirect_message(word, SOURCE.display_name, redirected)
    else:
        error = NO_DEFINITIONS_FOUND
    return CambridgeDictionaryResponse(word=word, entries=[], source=SOURCE.value, error=error)
