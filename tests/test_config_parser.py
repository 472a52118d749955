"""
Tests for the configuration file parser.
"""

import json

import pytest

from core.config_parser import LibraryConfigParser
from core.exceptions import ConfigParseError
from tests.fakes import TypeA, TypeB


@pytest.fixture
def parser(type_registry):
    return LibraryConfigParser(type_registry)


class TestLibraryConfigParser:
    """Test parsing of library declarations."""

    def test_parse_declarations(self, parser):
        """Test parsing declarations into instances."""
        libraries = parser.parse(json.dumps({"library": {
            "x": {"type": "type_a", "option": 1},
            "y": {"type": "type_b"},
        }}))

        assert list(libraries) == ["x", "y"]
        assert isinstance(libraries["x"], TypeA)
        assert libraries["x"].options == {"option": 1}
        assert isinstance(libraries["y"], TypeB)

    def test_parse_file(self, parser, write_config):
        """Test parsing a file from disk."""
        path = write_config("a.json", {"x": {"type": "type_a"}})

        assert list(parser.parse_file(path)) == ["x"]

    def test_other_top_level_fields_ignored(self, parser):
        """Test other top level fields ignored."""
        libraries = parser.parse('{"comment": "ignored", "library": {"x": {"type": "type_a"}}}')

        assert list(libraries) == ["x"]

    @pytest.mark.parametrize("text", ['null', '{}', '{"library": null}', '{"library": {}}'])
    def test_no_declarations(self, parser, text):
        """Test documents without declarations yield no libraries."""
        assert parser.parse(text) == {}

    def test_error_carries_path(self, parser, write_config):
        """Test parse error names the file."""
        path = write_config("a.json", raw="{")

        with pytest.raises(ConfigParseError) as excinfo:
            parser.parse_file(path)

        assert excinfo.value.path == path
        assert "a.json" in str(excinfo.value)

    def test_unreadable_file(self, parser, etc_dir):
        """Test unreadable file raises a parse error."""
        with pytest.raises(ConfigParseError, match="Cannot read"):
            parser.parse_file(etc_dir / "missing.json")

    def test_unknown_type(self, parser):
        """Test unknown type fails the whole file."""
        with pytest.raises(ConfigParseError, match="Unknown library type: nope"):
            parser.parse('{"library": {"x": {"type": "nope"}}}')

    def test_constructor_failure(self, parser):
        """Test constructor failure fails the whole file."""
        with pytest.raises(ConfigParseError, match="misconfigured"):
            parser.parse('{"library": {"x": {"type": "broken"}}}')

    def test_later_failure_discards_earlier_instances(self, parser, type_registry):
        """Test later failure discards earlier instances."""
        created = []

        def tracked(**kwargs):
            library = TypeA(**kwargs)
            created.append(library)
            return library

        type_registry.register_type("tracked", tracked)

        with pytest.raises(ConfigParseError):
            parser.parse(json.dumps({"library": {
                "x": {"type": "tracked"},
                "y": {"type": "nope"},
            }}))

        assert len(created) == 1
        assert created[0].close_count == 1
        assert created[0].load_count == 0
