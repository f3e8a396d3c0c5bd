import pytest

from wordhub.dictionaries.common import (
    CAMBRIDGE_ORIGIN,
    UNKNOWN_ERROR,
    differs_from,
    error_message,
    make_absolute_url,
    redirect_message,
    slug_id,
    suggestion_message,
    unique,
)


class TestMakeAbsoluteUrl:

    @pytest.mark.parametrize("path", ["/", "/media/english/uk_pron/r/run.mp3", "/dictionary/english/run?q=1"])
    def test_root_relative_gets_origin(self, path):
        assert make_absolute_url(CAMBRIDGE_ORIGIN, path) == CAMBRIDGE_ORIGIN + path

    @pytest.mark.parametrize("url", [
        "https://example.com/a.mp3",
        "http://example.com/a.mp3",
        "data:audio/mpeg;base64,AAAA",
    ])
    def test_absolute_passes_through(self, url):
        assert make_absolute_url(CAMBRIDGE_ORIGIN, url) == url

    def test_bare_relative_left_unresolved(self):
        assert make_absolute_url(CAMBRIDGE_ORIGIN, "media/run.mp3") == "media/run.mp3"

    def test_empty(self):
        assert make_absolute_url(CAMBRIDGE_ORIGIN, None) is None
        assert make_absolute_url(CAMBRIDGE_ORIGIN, "") is None


class TestHelpers:

    def test_slug_id(self):
        assert slug_id("Phrasal Verb") == "phrasal_verb"
        assert slug_id("North American") == "north_american"

    def test_unique_keeps_first_occurrence(self):
        assert unique(["flow", "", "flower", "flow"]) == ["flow", "flower"]

    def test_differs_from(self):
        assert differs_from("jog", "jogg")
        assert not differs_from("Run", "run")
        assert not differs_from("", "run")
        assert not differs_from(None, "run")

    def test_messages(self):
        assert redirect_message("jogg", "Cambridge", "jog") == (
            'No exact match found for "jogg". Cambridge may have redirected to "jog".'
        )
        assert suggestion_message(["flower", "flow"]) == "Word not found. Did you mean: flower, flow?"

    def test_error_message(self):
        assert error_message(RuntimeError("boom")) == "boom"
        assert error_message(RuntimeError()) == UNKNOWN_ERROR
