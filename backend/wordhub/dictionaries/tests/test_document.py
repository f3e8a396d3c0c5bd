from wordhub.dictionaries.document import Document, clean_text

HTML = """
<div class="entry">
  <h1 class="hw">run</h1>
  <ol>
    <li class="sense" id="s1">
      <span class="def">to move fast</span>
      <span class="x">She ran home.</span>
      <ol>
        <li class="subsense" id="s1a">
          <span class="def">to race</span>
          <span class="x">He ran the marathon.</span>
        </li>
      </ol>
    </li>
    <li class="sense" id="s2"><span class="def">to operate</span></li>
  </ol>
  <p class="mixed">own <b>bold</b>   text</p>
  <a class="link" href="/dictionary/run" data-x="1">link</a>
</div>
"""


class TestCleanText:

    def test_collapses_whitespace(self):
        assert clean_text("  a \n\t b  ") == "a b"

    def test_empty(self):
        assert clean_text(None) == ""
        assert clean_text("") == ""


class TestDocument:

    def setup_method(self):
        self.document = Document.from_html(HTML)

    def test_select_in_document_order(self):
        texts = [node.text() for node in self.document.select(".def")]
        assert texts == ["to move fast", "to race", "to operate"]

    def test_select_stop_at_skips_nested_matches(self):
        sense = self.document.select_one("#s1")
        examples = sense.select_texts(".x", stop_at=".subsense")
        assert examples == ["She ran home."]

    def test_select_stop_at_keeps_matches_of_the_boundary_itself(self):
        sense = self.document.select_one("#s1")
        subsenses = sense.select(".subsense", stop_at=".subsense")
        assert [node.attr("id") for node in subsenses] == ["s1a"]

    def test_missing_matches_are_empty(self):
        assert self.document.select(".nothing") == []
        assert self.document.select_one(".nothing") is None
        assert self.document.select_text(".nothing") == ""
        assert self.document.select_texts(".nothing") == []
        assert not self.document.exists(".nothing")

    def test_own_text_ignores_descendant_markup(self):
        node = self.document.select_one(".mixed")
        assert node.own_text() == "own text"
        assert node.text() == "own bold text"

    def test_attributes(self):
        link = self.document.select_one(".link")
        assert link.attr("href") == "/dictionary/run"
        assert link.attr("class") == "link"
        assert link.attr("missing") is None
        assert link.attr("missing", "fallback") == "fallback"
        assert link.has_class("link")
        assert not link.has_class("other")

    def test_closest(self):
        subsense = self.document.select_one("#s1a .def")
        assert subsense.closest(".sense").attr("id") == "s1"
        assert subsense.closest(".subsense").attr("id") == "s1a"
        assert subsense.closest(".missing") is None

    def test_siblings_and_children(self):
        first = self.document.select_one("#s1")
        assert first.next_sibling().attr("id") == "s2"
        assert first.next_sibling(".sense").attr("id") == "s2"
        assert first.next_sibling(".other") is None
        assert first.previous_sibling() is None
        assert [node.attr("id") for node in first.siblings()] == ["s2"]

        children = self.document.select_one("#s2").children()
        assert [node.text() for node in children] == ["to operate"]
        assert self.document.select_one("#s1").children(".x")[0].text() == "She ran home."

    def test_nodes_compare_by_element(self):
        assert self.document.select_one("#s1") == self.document.select("#s1")[0]
        assert len({self.document.select_one("#s1"), self.document.select_one("#s1")}) == 1

    def test_malformed_html_does_not_raise(self):
        document = Document.from_html("<div class='def'>unclosed <span>text")
        assert document.select_text(".def") == "unclosed text"
        assert Document.from_html("").select(".def") == []
        assert Document.from_html(None).select_one("div") is None

    def test_extraction_does_not_mutate_the_tree(self):
        before = self.document.html()
        self.document.select(".def", stop_at=".subsense")
        self.document.select_one("#s1a").closest(".sense")
        assert self.document.html() == before
