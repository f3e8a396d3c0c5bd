# models.py
# Pydantic 响应模型
#   - v1: 所有词典源共用的扁平 schema
#   - v2: 每个词典源一种词条结构（剑桥 / 牛津 / 韦氏）
#
# 可选字段默认为 None，序列化时省略：字段要么不出现，要么是非空值。

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """序列化为 camelCase 键、省略空字段的基础模型"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_dict(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


class LookupResponse(CamelModel):
    """所有查询响应共有的字段"""
    word: str = Field(..., description="查询的单词")
    source: str = Field(..., description="词典源名称")
    error: Optional[str] = None


# ==================== v1（扁平） ====================

class AudioData(CamelModel):
    uk: Optional[str] = None
    us: Optional[str] = None


class Definition(CamelModel):
    definition: str
    examples: Optional[List[str]] = None
    context: Optional[str] = None


class DictionaryEntry(CamelModel):
    word: str
    phonetic: Optional[str] = None
    part_of_speech: Optional[str] = None
    definitions: List[Definition]
    synonyms: Optional[List[str]] = None
    antonyms: Optional[List[str]] = None
    audio: Optional[AudioData] = None


class DictionaryResponse(LookupResponse):
    entries: List[DictionaryEntry] = Field(default_factory=list)
    audio: Optional[AudioData] = None
    suggestions: Optional[List[str]] = None


# ==================== v2: 剑桥 ====================

class CambridgePronunciation(CamelModel):
    uk_ipa: Optional[str] = None
    us_ipa: Optional[str] = None
    uk_audio_url: Optional[str] = None
    us_audio_url: Optional[str] = None


class CambridgeExample(CamelModel):
    text: str
    translation: Optional[str] = None


class CambridgeLevel(CamelModel):
    code: str = Field(..., description="CEFR 等级代码 (A1-C2)")
    description: Optional[str] = None


class RegionVariation(CamelModel):
    uk: Optional[str] = None
    us: Optional[str] = None


class CambridgeDefinition(CamelModel):
    text: str
    examples: Optional[List[CambridgeExample]] = None
    level: Optional[CambridgeLevel] = None
    domain: Optional[str] = None
    register_label: Optional[str] = Field(None, alias="register")
    grammar: Optional[str] = None
    labels: Optional[List[str]] = None
    alternates: Optional[List[str]] = None
    region_variation: Optional[RegionVariation] = None


class CambridgeDefGroup(CamelModel):
    part_of_speech: str
    definitions: List[CambridgeDefinition]
    group_level: Optional[CambridgeLevel] = None
    grammar_info: Optional[str] = None
    region_note: Optional[str] = None


class CambridgeRelatedPhrase(CamelModel):
    phrase: str
    definition: str
    example: Optional[str] = None
    link: Optional[str] = None


class CambridgeDictionaryEntry(CamelModel):
    word: str
    pronunciation: Optional[CambridgePronunciation] = None
    def_groups: List[CambridgeDefGroup] = Field(default_factory=list)
    alternative_forms: Optional[List[str]] = None
    related_phrases: Optional[List[CambridgeRelatedPhrase]] = None
    phrasal_verbs: Optional[List[CambridgeRelatedPhrase]] = None
    idioms: Optional[List[CambridgeRelatedPhrase]] = None


class CambridgeDictionaryResponse(LookupResponse):
    entries: List[CambridgeDictionaryEntry] = Field(default_factory=list)


# ==================== v2: 牛津 ====================

class OxfordPronunciation(CamelModel):
    phonetic: str
    audio_url: Optional[str] = None
    variant: Optional[str] = None
    notes: Optional[str] = None


class OxfordExample(CamelModel):
    text: str
    source: Optional[str] = None
    notes: Optional[str] = None


class OxfordRegister(CamelModel):
    type: str
    notes: Optional[str] = None


class OxfordLexicalCategory(CamelModel):
    id: str
    text: str


class OxfordGrammaticalFeature(CamelModel):
    type: str
    value: str


class OxfordEtymology(CamelModel):
    text: str
    language: Optional[str] = None
    period: Optional[str] = None


class OxfordDomain(CamelModel):
    id: str
    text: str


class OxfordRegion(CamelModel):
    id: str
    text: str


class OxfordSense(CamelModel):
    definition: str
    examples: Optional[List[OxfordExample]] = None
    registers: Optional[List[OxfordRegister]] = None
    notes: Optional[List[str]] = None
    domains: Optional[List[OxfordDomain]] = None
    regions: Optional[List[OxfordRegion]] = None
    cross_references: Optional[List[str]] = None
    subsenses: Optional[List["OxfordSense"]] = None
    synonyms: Optional[List[str]] = None


class OxfordVariantForm(CamelModel):
    text: str
    notes: Optional[List[str]] = None


class OxfordPhrase(CamelModel):
    text: str
    explanation: Optional[str] = None


class OxfordLexicalEntry(CamelModel):
    text: str
    lexical_category: OxfordLexicalCategory
    grammatical_features: Optional[List[OxfordGrammaticalFeature]] = None
    etymologies: Optional[List[OxfordEtymology]] = None
    pronunciations: Optional[List[OxfordPronunciation]] = None
    senses: List[OxfordSense]
    variant_forms: Optional[List[OxfordVariantForm]] = None
    phrases: Optional[List[OxfordPhrase]] = None


class OxfordDictionaryEntry(CamelModel):
    id: str
    word: str
    lexical_entries: List[OxfordLexicalEntry] = Field(default_factory=list)
    language: str = "en"


class OxfordDictionaryResponse(LookupResponse):
    entries: List[OxfordDictionaryEntry] = Field(default_factory=list)


# ==================== v2: 韦氏 ====================

class MerriamWordForm(CamelModel):
    form: str
    audio_url: str


class MerriamWebsterPronunciation(CamelModel):
    written: str
    audio_url: Optional[str] = None
    phonetic: Optional[str] = None
    word_forms: Optional[List[MerriamWordForm]] = None


class MerriamSenseNumber(CamelModel):
    main: str
    sub_letter: Optional[str] = None
    sub_number: Optional[str] = None
    full_form: str


class MerriamExample(CamelModel):
    text: str
    attribution: Optional[str] = None
    type: Optional[str] = None


class MerriamLabel(CamelModel):
    type: str
    text: str


class MerriamDefinition(CamelModel):
    sense_number: Optional[MerriamSenseNumber] = None
    text: str
    examples: Optional[List[MerriamExample]] = None
    usage_notes: Optional[List[str]] = None
    labels: Optional[List[MerriamLabel]] = None
    synonyms: Optional[List[str]] = None
    antonyms: Optional[List[str]] = None


class MerriamPartOfSpeechSection(CamelModel):
    part_of_speech: str
    functional: Optional[bool] = None
    inflections: Optional[List[str]] = None
    definitions: List[MerriamDefinition]


class MerriamEtymology(CamelModel):
    text: str
    language: Optional[str] = None
    first_use: Optional[str] = None


class MerriamRelatedPhrase(CamelModel):
    phrase: str
    definition: str
    examples: Optional[List[MerriamExample]] = None


class MerriamDictionaryEntry(CamelModel):
    word: str
    homonym_number: Optional[int] = None
    variety: Optional[str] = None
    pronunciation: Optional[MerriamWebsterPronunciation] = None
    functional_label: Optional[str] = None
    part_of_speech_sections: List[MerriamPartOfSpeechSection] = Field(default_factory=list)
    etymology: Optional[MerriamEtymology] = None
    first_known_use: Optional[str] = None
    related_phrases: Optional[List[MerriamRelatedPhrase]] = None
    other_forms: Optional[Dict[str, str]] = None


class MerriamWebsterDictionaryResponse(LookupResponse):
    entries: List[MerriamDictionaryEntry] = Field(default_factory=list)
    suggestions: Optional[List[str]] = None


OxfordSense.model_rebuild()
