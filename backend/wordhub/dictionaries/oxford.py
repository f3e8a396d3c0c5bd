"""
牛津高阶词典解析器（v2 schema）

页面上每个 ``.entry`` 是一个同形词，每个词性标题对应一个 lexical entry。
义项可以嵌套：``.sense`` 里可以有 ``.subsense``，子义项还可以继续嵌套，
每一层保留自己的例句、语体、领域和地区标签。
"""

import re
from typing import List, Optional

from loguru import logger

from wordhub.dictionaries.common import (
    NO_DEFINITIONS_FOUND,
    differs_from,
    slug_id,
    unique,
)
from wordhub.dictionaries.document import Document, Node
from wordhub.dictionaries.oxford_audio import extract_pronunciations
from wordhub.enums import DictionarySource
from wordhub.models import (
    OxfordDictionaryEntry,
    OxfordDictionaryResponse,
    OxfordDomain,
    OxfordEtymology,
    OxfordExample,
    OxfordGrammaticalFeature,
    OxfordLexicalCategory,
    OxfordLexicalEntry,
    OxfordPhrase,
    OxfordRegion,
    OxfordRegister,
    OxfordSense,
    OxfordVariantForm,
)

SOURCE = DictionarySource.OXFORD

ENTRY = ".entry, [hclass='entry']"
HEADWORD = ".webtop .headword, [hclass='headword']"
POS_HEADER = "h2.pos-header, span.pos, [hclass='pos']"
SENSE = ".sense"
SUBSENSE = ".subsense"
IDIOMS = ".idioms"

# 词条下的顶层义项；嵌套义项和习语义项单独处理
TOP_LEVEL_SENSE_BOUNDARY = ", ".join([SENSE, SUBSENSE, IDIOMS])

REGISTER_TYPES = ("informal", "formal", "slang", "literary", "humorous", "technical")
REGISTER_LABELS = ".grammar, .labels, .reg"

_ORIGIN_LANGUAGE = re.compile(r"from\s+((?:(?:Old|Middle|Late|Early|Medieval|Vulgar)\s+)?[A-Z][a-z]+)")
_ORIGIN_PERIOD = re.compile(r"(?:Old|Middle|Late|Modern|Ancient)\s+[A-Z][a-z]+")
_COUNTABILITY = re.compile(r"\b(uncountable|countable)\b")
_NUMBER = re.compile(r"\b(singular|plural)\b")
_TRANSITIVITY = re.compile(r"\b(intransitive|transitive)\b")


# ---------- 义项 ----------

def extract_examples(sense: Node) -> List[OxfordExample]:
    examples = []
    for x in sense.select(".x", stop_at=SUBSENSE):
        text = x.text()
        if not text:
            continue
        example = OxfordExample(text=text)
        source = x.select_text(".cf")
        if source:
            example.source = source
        notes = x.select_text(".label")
        if notes:
            example.notes = notes
        examples.append(example)

    for extra in sense.select(".collapse .unx", stop_at=SUBSENSE):
        text = extra.text()
        if text:
            examples.append(OxfordExample(text=text))

    return examples


def extract_registers(sense: Node) -> List[OxfordRegister]:
    """formal、informal 等语体标签；类型未知的用法说明归为 'other'"""
    registers = []
    for text in sense.select_texts(REGISTER_LABELS, stop_at=SUBSENSE):
        lower = text.lower()
        register_type = next((t for t in REGISTER_TYPES if t in lower), None)
        if register_type is None and ("used" in lower or "style" in lower):
            register_type = "other"
        if register_type is not None:
            registers.append(OxfordRegister(type=register_type, notes=text))
    return registers


def extract_domains(sense: Node) -> List[OxfordDomain]:
    return [OxfordDomain(id=slug_id(text), text=text) for text in sense.select_texts(".domain", stop_at=SUBSENSE)]


def extract_regions(sense: Node) -> List[OxfordRegion]:
    return [OxfordRegion(id=slug_id(text), text=text) for text in sense.select_texts(".region", stop_at=SUBSENSE)]


def extract_synonyms(sense: Node) -> List[str]:
    synonyms = []
    for text in sense.select_texts('.unbox[unbox="synonyms"] .body .unbox', stop_at=SUBSENSE):
        if text == "example":
            continue
        synonyms.extend(part.strip() for part in text.split("▪") if part.strip())
    return synonyms


def extract_sense(element: Node) -> Optional[OxfordSense]:
    """
    构建义项，并递归构建其子义项

    嵌套在 ``.subsense`` 里的信息只属于该子义项。元素没有自身释义时返回 None。
    """
    definition = element.select_text(".def", stop_at=SUBSENSE)
    if not definition:
        return None

    sense = OxfordSense(definition=definition)

    examples = extract_examples(element)
    if examples:
        sense.examples = examples

    registers = extract_registers(element)
    if registers:
        sense.registers = registers

    domains = extract_domains(element)
    if domains:
        sense.domains = domains

    regions = extract_regions(element)
    if regions:
        sense.regions = regions

    subsenses = extract_subsenses(element)
    if subsenses:
        sense.subsenses = subsenses

    synonyms = extract_synonyms(element)
    if synonyms:
        sense.synonyms = synonyms

    cross_references = element.select_texts(".xrefs a", stop_at=SUBSENSE)
    if cross_references:
        sense.cross_references = cross_references

    notes = element.select_texts(".note", stop_at=SUBSENSE)
    if notes:
        sense.notes = notes

    return sense


def extract_subsenses(element: Node) -> List[OxfordSense]:
    subsenses = []
    for child in element.select(SUBSENSE, stop_at=SUBSENSE):
        subsense = extract_sense(child)
        if subsense is not None:
            subsenses.append(subsense)
        else:
            subsenses.extend(extract_subsenses(child))
    return subsenses


def extract_senses(scope: Node) -> List[OxfordSense]:
    senses = []
    for element in scope.select(SENSE, stop_at=TOP_LEVEL_SENSE_BOUNDARY):
        sense = extract_sense(element)
        if sense is not None:
            senses.append(sense)
        else:
            # 没有自身释义的义项，把子义项提到当前层级
            senses.extend(extract_subsenses(element))
    return senses


# ---------- 词条 ----------

def extract_lexical_category(pos_element: Node) -> OxfordLexicalCategory:
    text = pos_element.select_text(".pos") or pos_element.text()
    return OxfordLexicalCategory(id=slug_id(text), text=text)


def extract_grammatical_features(entry: Node, part_of_speech: str) -> List[OxfordGrammaticalFeature]:
    """名词取可数性或单复数，动词取及物性"""
    grammar = " ".join(entry.select_texts(".grammar")).lower()
    if not grammar:
        return []

    features = []
    part_of_speech = part_of_speech.lower()
    if part_of_speech == "noun":
        countability = unique(_COUNTABILITY.findall(grammar))
        if countability:
            features.extend(OxfordGrammaticalFeature(type="countability", value=v) for v in countability)
        else:
            number = _NUMBER.search(grammar)
            if number:
                features.append(OxfordGrammaticalFeature(type="number", value=number.group(1)))
    elif part_of_speech == "verb":
        features.extend(
            OxfordGrammaticalFeature(type="transitivity", value=v)
            for v in unique(_TRANSITIVITY.findall(grammar))
        )
    return features


def extract_etymology(entry: Node) -> Optional[OxfordEtymology]:
    """Word Origin 框；文本中提到来源语言和时期时一并提取"""
    box = entry.select_one('.unbox[unbox="wordorigin"] .body')
    if box is None:
        return None
    text = box.text()
    if not text:
        return None

    etymology = OxfordEtymology(text=text)
    language = _ORIGIN_LANGUAGE.search(text)
    if language:
        etymology.language = language.group(1)
    period = _ORIGIN_PERIOD.search(text)
    if period:
        etymology.period = period.group(0)
    return etymology


def extract_idioms(entry: Node) -> List[OxfordPhrase]:
    idioms = []
    for idiom in entry.select(".idioms .idm-g"):
        text = idiom.select_text(".idm")
        if not text:
            continue
        phrase = OxfordPhrase(text=text)
        explanation = idiom.select_text(".def")
        if explanation:
            phrase.explanation = explanation
        idioms.append(phrase)
    return idioms


def extract_variant_forms(entry: Node) -> List[OxfordVariantForm]:
    variants = []
    for element in entry.select(".variants"):
        text = element.text()
        if not text:
            continue
        variant = OxfordVariantForm(text=text)
        notes = element.select_texts(".label")
        if notes:
            variant.notes = notes
        variants.append(variant)
    return variants


def _senses_scope(pos_element: Node, entry: Node) -> Node:
    """词性标题块之后的内容，找不到时取整个词条"""
    top = pos_element.closest(".top-g")
    if top is not None:
        siblings = top.siblings()
        if siblings:
            return siblings[0]
    return entry


def _pos_elements(entry: Node) -> List[Node]:
    elements = []
    seen = set()
    for element in entry.select(POS_HEADER, stop_at=f"{SENSE}, {IDIOMS}"):
        key = element.text()
        if not key or key in seen:
            continue
        seen.add(key)
        elements.append(element)
    return elements


def extract_lexical_entries(entry: Node, headword: str) -> List[OxfordLexicalEntry]:
    lexical_entries = []

    for pos_element in _pos_elements(entry):
        category = extract_lexical_category(pos_element)
        scope = _senses_scope(pos_element, entry)
        senses = extract_senses(scope)
        if not senses and scope != entry:
            senses = extract_senses(entry)
        if not senses:
            continue

        lexical_entry = OxfordLexicalEntry(text=headword, lexical_category=category, senses=senses)

        pronunciations = extract_pronunciations(entry)
        if pronunciations:
            lexical_entry.pronunciations = pronunciations

        features = extract_grammatical_features(entry, category.text)
        if features:
            lexical_entry.grammatical_features = features

        etymology = extract_etymology(entry)
        if etymology:
            lexical_entry.etymologies = [etymology]

        phrases = extract_idioms(entry)
        if phrases:
            lexical_entry.phrases = phrases

        variant_forms = extract_variant_forms(entry)
        if variant_forms:
            lexical_entry.variant_forms = variant_forms

        lexical_entries.append(lexical_entry)

    return lexical_entries


def extract_entries(document: Document, word: str) -> List[OxfordDictionaryEntry]:
    entries = []
    for index, element in enumerate(document.select(ENTRY, stop_at=ENTRY)):
        headword = element.select_text(HEADWORD) or word
        lexical_entries = extract_lexical_entries(element, headword)
        if not lexical_entries:
            continue
        entries.append(
            OxfordDictionaryEntry(
                id=f"{headword}-{index + 1}",
                word=headword,
                lexical_entries=lexical_entries,
            )
        )
    return entries


def parse(document: Document, word: str) -> OxfordDictionaryResponse:
    """把已抓取的页面组装为 v2 牛津响应"""
    if "did not match" in document.select_text(".result-header"):
        return OxfordDictionaryResponse(
            word=word, entries=[], source=SOURCE.value, error=f'No entries found for "{word}"'
        )

    entries = extract_entries(document, word)
    logger.debug(f"Oxford: {len(entries)} entries for '{word}'")

    if entries:
        return OxfordDictionaryResponse(word=word, entries=entries, source=SOURCE.value)

    alternate = document.select_text(".result-header a")
    if differs_from(alternate, word):
        error = f'No exact match found for "{word}". Did you mean "{alternate}"?'
    else:
        error = NO_DEFINITIONS_FOUND
    return OxfordDictionaryResponse(word=word, entries=[], source=SOURCE.value, error=error)
