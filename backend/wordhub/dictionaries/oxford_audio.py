"""
牛津发音音频匹配

牛津页面把发音按钮和音标并排列出，两者之间没有可靠的对应关系，
屈折形式共用一个页面的动词（do / does / did / done / doing）尤其明显。
先把发音按钮分到英式和美式两个池，再按可信度从高到低的几级规则为每个音标匹配 URL：

1. form      -- 音标附近识别出的词形等于音频文件名中的词形
2. ipa       -- 音标是某个词形的已知 IPA 模式
3. phonetic  -- 发音按钮旁边的音标与之完全相同
4. position  -- 按音标的序号在对应地区的池中取
5. first     -- 任意可用的第一个音频

每一级是一个独立函数，可以单独测试其触发条件。
"""

import re
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Tuple

from loguru import logger

from wordhub.dictionaries.common import OXFORD_ORIGIN, make_absolute_url, unique
from wordhub.dictionaries.document import Node
from wordhub.models import OxfordPronunciation

VARIANT_UK = "British English"
VARIANT_US = "American English"
VARIANT_UNKNOWN = "Unknown"

AUDIO_BUTTON = ".sound.audio_play_button"
PHONETIC = ".phon"
CONTAINERS = ".pron-g, .phons_br, .phons_n_am"

KNOWN_FORMS = ("do", "does", "did", "done", "doing")

# 音标片段 -> 对应的词形
IPA_FORM_PATTERNS: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("/duː/", ("do", "does")),
    ("/dʌz/", ("does",)),
    ("/dɪd/", ("did",)),
    ("/dʌn/", ("done",)),
    ("ˈduːɪŋ", ("doing",)),
)

_FILENAME_FORM = re.compile(r"/([a-z]+)(?:__|\w*?)_(?:gb|us)", re.IGNORECASE)
_RAW_MP3_ATTR = re.compile(r"data-src-mp3=(?:[\"'])?([^\"'\s>]+)", re.IGNORECASE)
_WORD = re.compile(r"[a-z]+")


@dataclass
class AudioCandidate:
    url: str
    variant: str
    phonetic: Optional[str] = None
    form_hint: Optional[str] = None


@dataclass
class AudioPools:
    uk: List[AudioCandidate] = field(default_factory=list)
    us: List[AudioCandidate] = field(default_factory=list)

    def form_hints(self) -> List[str]:
        return unique(c.form_hint for c in self.uk + self.us if c.form_hint)


@dataclass
class AudioMatch:
    url: str
    variant: str
    tier: str


# ---------- 收集音频 ----------

def form_hint_from_url(url: Optional[str]) -> Optional[str]:
    """牛津音频文件名中的词形，例如 ``.../does__gb_2.mp3`` -> ``does``"""
    if not url:
        return None
    match = _FILENAME_FORM.search(url)
    if not match:
        return None
    return match.group(1).lower()


def detect_form(text: str, forms: Iterable[str] = KNOWN_FORMS) -> Optional[str]:
    """``forms`` 中第一个在 ``text`` 里作为完整单词出现的词形"""
    words = set(_WORD.findall(text.lower()))
    for form in forms:
        if form in words:
            return form
    return None


def _audio_url(button: Node) -> Optional[str]:
    url = button.attr("data-src-mp3")
    if not url:
        match = _RAW_MP3_ATTR.search(button.html())
        if match:
            url = match.group(1)
    return url


def collect_audio(scope: Node) -> AudioPools:
    """把 ``scope`` 下的发音按钮分到英式或美式池"""
    pools = AudioPools()

    for button in scope.select(AUDIO_BUTTON):
        raw_url = _audio_url(button)
        url = make_absolute_url(OXFORD_ORIGIN, raw_url)
        if not url:
            continue

        container = button.closest(CONTAINERS)
        phonetic = container.select_text(PHONETIC) if container is not None else ""

        form_hint = form_hint_from_url(raw_url)
        if form_hint is None and container is not None:
            form_hint = detect_form(container.text())

        if button.has_class("pron-uk"):
            pool, variant = pools.uk, VARIANT_UK
        elif button.has_class("pron-us"):
            pool, variant = pools.us, VARIANT_US
        else:
            pool, variant = pools.uk, VARIANT_UNKNOWN

        pool.append(AudioCandidate(url=url, variant=variant, phonetic=phonetic or None, form_hint=form_hint))

    logger.debug(f"Oxford audio: {len(pools.uk)} UK / {len(pools.us)} US candidates")
    return pools


# ---------- 匹配规则 ----------

def match_by_form(form: Optional[str], pools: Sequence[List[AudioCandidate]]) -> Optional[AudioCandidate]:
    if not form:
        return None
    for pool in pools:
        for candidate in pool:
            if candidate.form_hint == form:
                return candidate
    return None


def match_by_ipa_pattern(phonetic: str, pool: List[AudioCandidate]) -> Optional[AudioCandidate]:
    """
    通过 ``IPA_FORM_PATTERNS`` 为音标匹配词形

    只尝试音标中找到的第一个模式，且只在主池中查找。
    """
    for pattern, forms in IPA_FORM_PATTERNS:
        if pattern in phonetic:
            for candidate in pool:
                if candidate.form_hint in forms:
                    return candidate
            return None
    return None


def match_by_phonetic(phonetic: str, pools: Sequence[List[AudioCandidate]]) -> Optional[AudioCandidate]:
    for pool in pools:
        for candidate in pool:
            if candidate.phonetic == phonetic:
                return candidate
    return None


def match_by_position(index: int, pool: List[AudioCandidate]) -> Optional[AudioCandidate]:
    if not pool:
        return None
    return pool[index % len(pool)]


def match_first_available(pools: AudioPools) -> Optional[AudioMatch]:
    if pools.uk:
        return AudioMatch(url=pools.uk[0].url, variant=VARIANT_UK, tier="first")
    if pools.us:
        return AudioMatch(url=pools.us[0].url, variant=VARIANT_US, tier="first")
    return None


def resolve_audio(
    phonetic: str,
    index: int,
    pools: AudioPools,
    form: Optional[str] = None,
    is_uk: bool = False,
    is_us: bool = False,
) -> Optional[AudioMatch]:
    """
    为一个音标选择音频 URL

    Args:
        phonetic: 音标文本
        index: 音标在所在范围中的序号
        pools: 收集到的候选音频
        form: 音标附近识别出的词形
        is_uk / is_us: 已知时为音标所属地区

    Returns:
        匹配结果及命中的规则；范围内完全没有音频时返回 None
    """
    if is_uk:
        searched = [pools.uk]
    elif is_us:
        searched = [pools.us]
    else:
        searched = [pools.uk, pools.us]

    candidate = match_by_form(form, searched)
    if candidate is not None:
        return AudioMatch(url=candidate.url, variant=candidate.variant, tier="form")

    candidate = match_by_ipa_pattern(phonetic, searched[0])
    if candidate is not None:
        return AudioMatch(url=candidate.url, variant=candidate.variant, tier="ipa")

    candidate = match_by_phonetic(phonetic, searched)
    if candidate is not None:
        return AudioMatch(url=candidate.url, variant=candidate.variant, tier="phonetic")

    if is_uk:
        primary = pools.uk
    elif is_us:
        primary = pools.us
    else:
        primary = pools.uk or pools.us
    candidate = match_by_position(index, primary)
    if candidate is not None:
        if is_uk:
            variant = VARIANT_UK
        elif is_us:
            variant = VARIANT_US
        else:
            variant = candidate.variant
        return AudioMatch(url=candidate.url, variant=variant, tier="position")

    return match_first_available(pools)


# ---------- 发音 ----------

def is_british(phon: Node, container: Optional[Node]) -> bool:
    if "BrE" in phon.text():
        return True
    if container is None:
        return False
    return container.has_class("phons_br") or container.exists(".pron-uk")


def is_american(phon: Node, container: Optional[Node]) -> bool:
    if "NAmE" in phon.text():
        return True
    if container is None:
        return False
    return container.has_class("phons_n_am") or container.exists(".pron-us")


def extract_pronunciations(scope: Node) -> List[OxfordPronunciation]:
    """``scope`` 下每个音标对应一条发音，附带最可能的音频"""
    pools = collect_audio(scope)
    forms = unique(pools.form_hints() + list(KNOWN_FORMS))

    pronunciations = []
    for index, phon in enumerate(scope.select(PHONETIC)):
        phonetic = phon.text()
        if not phonetic:
            continue

        container = phon.closest(CONTAINERS)
        form = detect_form(container.text(), forms) if container is not None else None

        match = resolve_audio(
            phonetic,
            index,
            pools,
            form=form,
            is_uk=is_british(phon, container),
            is_us=is_american(phon, container),
        )

        pronunciation = OxfordPronunciation(phonetic=phonetic, variant=VARIANT_UNKNOWN)
        if match is not None:
            logger.debug(f"Oxford audio: {phonetic} matched by {match.tier} -> {match.url}")
            pronunciation.audio_url = match.url
            pronunciation.variant = match.variant

        if container is not None:
            notes = " ".join(container.select_texts(".label"))
            if notes:
                pronunciation.notes = notes

        pronunciations.append(pronunciation)

    return pronunciations
