from wordhub.dictionaries import flat
from wordhub.dictionaries.document import Document

CAMBRIDGE_RUN = """
<div class="entry-body__el">
  <span class="hw dhw">run</span>
  <span class="pos dpos">noun</span>
  <span class="uk dpron-i"><span class="pron dpron">/rʌn/</span>
    <audio><source src="/media/english/uk_pron/r/run/run.mp3"></audio></span>
  <div class="def-block"><div class="def ddef_d">an act of running</div>
    <div class="examp dexamp">a ten-minute run</div></div>
</div>
<div class="entry-body__el">
  <span class="hw dhw">run</span>
  <span class="pos dpos">verb</span>
  <div class="def-block"><div class="def ddef_d">to move fast</div></div>
  <div class="def-block"><div class="def ddef_d">to operate</div></div>
</div>
"""

OXFORD_RUN = """
<div class="entry">
  <h1 class="headword">run</h1>
  <span class="pos">verb</span>
  <span class="phon">/rʌn/</span>
  <div class="sound audio_play_button pron-uk" data-src-mp3="/media/english/uk_pron/r/run__gb_1.mp3"></div>
  <ol>
    <li class="sense"><span class="def">to move fast</span><span class="x">I ran.</span></li>
  </ol>
  <span class="synonyms">Synonyms: race, sprint</span>
  <div class="idioms">
    <span class="idm-g"><span class="idm">run wild</span>
      <li class="sense"><span class="def">to behave without control</span></li></span>
  </div>
</div>
"""

WEBSTER_RUN = """
<div class="entry-word-section-container">
  <a class="important-blue-link">verb</a>
  <div class="vg-sseq-entry-item">
    <div class="vg-sseq-entry-item-label">1</div>
    <div class="sb-entry">to go faster than a walk</div>
    <span class="in-sentences">run to the store</span>
  </div>
</div>
<div id="related-phrases">
  <ul>
    <li class="related-phrases-list-item"><a>in the long run</a></li>
    <li class="related-phrases-list-item"><a>on the run</a></li>
    <li class="related-phrases-list-item"><a>jog along</a></li>
  </ul>
</div>
"""


class TestFlatCambridge:

    def test_one_entry_per_block_in_order(self, assert_sparse):
        response = flat.parse_cambridge(Document.from_html(CAMBRIDGE_RUN), "run")
        assert response.error is None
        assert [entry.part_of_speech for entry in response.entries] == ["noun", "verb"]
        assert all(len(entry.definitions) >= 1 for entry in response.entries)
        assert response.entries[0].definitions[0].examples == ["a ten-minute run"]
        assert response.entries[0].phonetic == "/rʌn/"
        assert response.audio.uk == "https://dictionary.cambridge.org/media/english/uk_pron/r/run/run.mp3"
        assert_sparse(response)

    def test_flat_keys(self):
        data = flat.parse_cambridge(Document.from_html(CAMBRIDGE_RUN), "run").to_dict()
        assert set(data) == {"word", "entries", "source", "audio"}
        assert data["entries"][0]["partOfSpeech"] == "noun"
        assert data["entries"][0]["definitions"][0]["definition"] == "an act of running"

    def test_redirect(self):
        response = flat.parse_cambridge(Document.from_html('<span class="hw dhw">jog</span>'), "jogg")
        assert response.entries == []
        assert response.error == 'No exact match found for "jogg". Cambridge may have redirected to "jog".'


class TestFlatOxford:

    def setup_method(self):
        self.response = flat.parse_oxford(Document.from_html(OXFORD_RUN), "running")

    def test_response_word_is_page_headword(self):
        assert self.response.word == "run"
        assert self.response.source == "oxford"

    def test_idiom_entries(self):
        idiom = self.response.entries[0]
        assert idiom.word == "run (run wild)"
        assert idiom.part_of_speech == "idiom"
        assert idiom.definitions[0].definition == "to behave without control"

    def test_main_entry(self, assert_sparse):
        entry = self.response.entries[1]
        assert entry.part_of_speech == "verb"
        assert [d.definition for d in entry.definitions] == ["to move fast"]
        assert entry.definitions[0].examples == ["I ran."]
        assert entry.synonyms == ["race", "sprint"]
        assert entry.audio.uk.endswith("/uk_pron/r/run__gb_1.mp3")
        assert_sparse(self.response)

    def test_no_definitions(self):
        response = flat.parse_oxford(Document.from_html("<div></div>"), "run")
        assert response.error == "No definitions found"


class TestFlatMerriamWebster:

    def test_entries_and_related_phrases(self, assert_sparse):
        response = flat.parse_merriam_webster(Document.from_html(WEBSTER_RUN), "run")
        assert [entry.word for entry in response.entries] == ["run", "in the long run", "on the run"]
        assert response.entries[0].definitions[0].definition == "1. to go faster than a walk"
        assert response.entries[0].definitions[0].examples == ["run to the store"]
        assert response.entries[1].definitions[0].definition == 'Related phrase containing "run"'
        assert_sparse(response)

    def test_related_phrases_are_capped(self):
        items = "".join(
            f'<li class="related-phrases-list-item"><a>run {i}</a></li>' for i in range(15)
        )
        html = WEBSTER_RUN.replace("</ul>", items + "</ul>")
        response = flat.parse_merriam_webster(Document.from_html(html), "run")
        assert len(response.entries) == 1 + flat.MAX_RELATED_PHRASES

    def test_suggestions(self):
        html = '<div class="spelling-suggestions"><a>flower</a><a>flow</a></div>'
        response = flat.parse_merriam_webster(Document.from_html(html), "flowr")
        assert response.entries == []
        assert response.error == "Word not found. Did you mean: flower, flow?"
        assert response.suggestions == ["flower", "flow"]
