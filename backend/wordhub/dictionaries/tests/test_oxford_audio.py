import pytest

from wordhub.dictionaries import oxford_audio
from wordhub.dictionaries.document import Document
from wordhub.dictionaries.oxford_audio import (
    VARIANT_UK,
    VARIANT_US,
    AudioCandidate,
    AudioPools,
    resolve_audio,
)

UK_PRON = "https://www.oxfordlearnersdictionaries.com/media/english/uk_pron/d/do_/do__"


def uk(form, phonetic=None):
    return AudioCandidate(url=f"{UK_PRON}/{form}__gb_1.mp3", variant=VARIANT_UK, phonetic=phonetic, form_hint=form)


def us(form, phonetic=None):
    return AudioCandidate(
        url=f"https://example.com/us_pron/{form}__us_1.mp3", variant=VARIANT_US, phonetic=phonetic, form_hint=form
    )


DO_HTML = """
<div class="entry">
  <div class="audio-row">
    <div class="sound audio_play_button pron-uk" data-src-mp3="/media/english/uk_pron/d/do_/do__/do__gb_1.mp3"></div>
    <div class="sound audio_play_button pron-uk" data-src-mp3="/media/english/uk_pron/d/do_/do__/does__gb_1.mp3"></div>
    <div class="sound audio_play_button pron-uk" data-src-mp3="/media/english/uk_pron/d/do_/do__/did__gb_1.mp3"></div>
    <div class="sound audio_play_button pron-uk" data-src-mp3="/media/english/uk_pron/d/do_/do__/done__gb_1.mp3"></div>
  </div>
  <div class="phons_br"><span class="phon">/dʌn/</span></div>
</div>
"""


class TestFormHints:

    @pytest.mark.parametrize("url, form", [
        ("/media/english/uk_pron/d/do_/do__/done__gb_1.mp3", "done"),
        ("/media/english/uk_pron/d/do_/do__/does__gb_2.mp3", "does"),
        ("/media/english/us_pron/d/do_/do__/did__us_1.mp3", "did"),
        ("/media/english/uk_pron/r/run/run__/run__gb_1.mp3", "run"),
    ])
    def test_form_hint_from_url(self, url, form):
        assert oxford_audio.form_hint_from_url(url) == form

    def test_no_hint(self):
        assert oxford_audio.form_hint_from_url(None) is None
        assert oxford_audio.form_hint_from_url("/media/sound.mp3") is None

    def test_detect_form_matches_whole_words(self):
        assert oxford_audio.detect_form("past participle done /dʌn/") == "done"
        assert oxford_audio.detect_form("doing something") == "doing"
        assert oxford_audio.detect_form("undone") is None


class TestScenarioDone:

    def test_done_transcription_resolves_by_ipa_pattern(self):
        document = Document.from_html(DO_HTML)
        pools = oxford_audio.collect_audio(document)
        assert [c.form_hint for c in pools.uk] == ["do", "does", "did", "done"]

        match = resolve_audio("/dʌn/", 0, pools, is_uk=True)
        assert match.tier == "ipa"
        assert match.url == (
            "https://www.oxfordlearnersdictionaries.com/media/english/uk_pron/d/do_/do__/done__gb_1.mp3"
        )

    def test_extracted_pronunciation_uses_done_audio(self):
        pronunciations = oxford_audio.extract_pronunciations(Document.from_html(DO_HTML))
        assert len(pronunciations) == 1
        assert pronunciations[0].phonetic == "/dʌn/"
        assert pronunciations[0].variant == VARIANT_UK
        assert pronunciations[0].audio_url.endswith("/done__gb_1.mp3")


class TestMatchingTiers:

    def test_form_tier_wins(self):
        pools = AudioPools(uk=[uk("do"), uk("did")])
        match = resolve_audio("/dɪd/", 0, pools, form="did", is_uk=True)
        assert match.tier == "form"
        assert match.url.endswith("/did__gb_1.mp3")

    def test_form_tier_needs_a_matching_hint(self):
        pools = AudioPools(uk=[uk("do")])
        assert oxford_audio.match_by_form("doing", [pools.uk]) is None
        assert oxford_audio.match_by_form(None, [pools.uk]) is None

    def test_ipa_tier(self):
        pools = AudioPools(uk=[uk("do"), uk("did")])
        match = resolve_audio("/dɪd/", 0, pools, is_uk=True)
        assert match.tier == "ipa"
        assert match.url.endswith("/did__gb_1.mp3")

    def test_ipa_tier_only_tries_first_pattern(self):
        pool = [uk("does")]
        assert oxford_audio.match_by_ipa_pattern("/duː/", pool).form_hint == "does"
        assert oxford_audio.match_by_ipa_pattern("/dɪd/", pool) is None
        assert oxford_audio.match_by_ipa_pattern("/rʌn/", pool) is None

    def test_phonetic_tier(self):
        pools = AudioPools(uk=[uk("run", "/rʌn/"), uk("ran", "/ræn/")])
        match = resolve_audio("/ræn/", 0, pools, is_uk=True)
        assert match.tier == "phonetic"
        assert match.url.endswith("/ran__gb_1.mp3")

    def test_position_tier_wraps_around(self):
        pools = AudioPools(uk=[uk("run"), uk("ran")])
        match = resolve_audio("/rʌn/", 3, pools, is_uk=True)
        assert match.tier == "position"
        assert match.url.endswith("/ran__gb_1.mp3")
        assert match.variant == VARIANT_UK

    def test_position_tier_uses_the_region_pool(self):
        pools = AudioPools(uk=[uk("run")], us=[us("run")])
        match = resolve_audio("/rʌn/", 0, pools, is_us=True)
        assert match.tier == "position"
        assert match.variant == VARIANT_US
        assert match.url.endswith("/run__us_1.mp3")

    def test_first_available_when_region_pool_is_empty(self):
        pools = AudioPools(us=[us("run")])
        match = resolve_audio("/rʌn/", 0, pools, is_uk=True)
        assert match.tier == "first"
        assert match.variant == VARIANT_US

    def test_no_audio_at_all(self):
        assert resolve_audio("/rʌn/", 0, AudioPools()) is None

    def test_pronunciation_kept_without_audio(self):
        document = Document.from_html('<div class="phons_br"><span class="phon">/rʌn/</span></div>')
        pronunciations = oxford_audio.extract_pronunciations(document)
        assert [(p.phonetic, p.variant, p.audio_url) for p in pronunciations] == [
            ("/rʌn/", "Unknown", None)
        ]
