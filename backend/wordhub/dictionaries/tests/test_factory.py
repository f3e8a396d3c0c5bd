import pytest

from wordhub.dictionaries import cambridge, flat, oxford, webster
from wordhub.dictionaries.factory import PARSERS, get_parser, parse_definition
from wordhub.enums import DictionarySource, SchemaVersion
from wordhub.models import (
    CambridgeDictionaryResponse,
    DictionaryResponse,
    MerriamWebsterDictionaryResponse,
    OxfordDictionaryResponse,
)


class TestDictionaryFactory:
    """测试按词典源和 schema 版本获取解析器"""

    def test_every_pair_is_registered(self):
        for version in SchemaVersion:
            for source in DictionarySource:
                assert (version, source) in PARSERS

    def test_get_parser(self):
        assert get_parser(DictionarySource.CAMBRIDGE) is cambridge.parse
        assert get_parser(DictionarySource.OXFORD, SchemaVersion.V2) is oxford.parse
        assert get_parser(DictionarySource.MERRIAM_WEBSTER, SchemaVersion.V1) is flat.parse_merriam_webster
        assert get_parser("merriam-webster", "v2") is webster.parse

    def test_unsupported_source(self):
        with pytest.raises(ValueError):
            get_parser("wiktionary")

    @pytest.mark.parametrize("source, version, model", [
        (DictionarySource.CAMBRIDGE, SchemaVersion.V2, CambridgeDictionaryResponse),
        (DictionarySource.OXFORD, SchemaVersion.V2, OxfordDictionaryResponse),
        (DictionarySource.MERRIAM_WEBSTER, SchemaVersion.V2, MerriamWebsterDictionaryResponse),
        (DictionarySource.CAMBRIDGE, SchemaVersion.V1, DictionaryResponse),
    ])
    def test_parse_definition_returns_source_model(self, source, version, model):
        response = parse_definition(source, "<html></html>", "run", version)
        assert isinstance(response, model)
        assert response.source == source.value
        assert response.entries == []
        assert response.error


class TestDictionarySource:

    @pytest.mark.parametrize("name, expected", [
        ("cambridge", DictionarySource.CAMBRIDGE),
        (" Oxford ", DictionarySource.OXFORD),
        ("MERRIAM-WEBSTER", DictionarySource.MERRIAM_WEBSTER),
        ("merriam_webster", DictionarySource.MERRIAM_WEBSTER),
        ("bogus", None),
        ("", None),
        (None, None),
    ])
    def test_parse(self, name, expected):
        assert DictionarySource.parse(name) is expected

    def test_default_order_and_names(self):
        assert DictionarySource.default_order() == [
            DictionarySource.CAMBRIDGE,
            DictionarySource.OXFORD,
            DictionarySource.MERRIAM_WEBSTER,
        ]
        assert DictionarySource.MERRIAM_WEBSTER.display_name == "Merriam-Webster"
        assert str(DictionarySource.OXFORD) == "oxford"
