"""
Completion provider tests

Tests which options are offered for flags, identifiers and closing tags.
"""

import pytest

from macrocomplete.config import AppSettings
from macrocomplete.lib.flags import FlagRegistry
from macrocomplete.lib.macros import MacroRegistry
from macrocomplete.lib.options import ClosingTagOption, FlagOption, MacroOption
from macrocomplete.lib.provider import CompletionProvider


@pytest.fixture
def provider():
    return CompletionProvider(MacroRegistry(), FlagRegistry())


class TestIdentifierCompletion:
    """Test macro options for a typed identifier"""

    def test_prefix_match(self, provider):
        """Only macros starting with the identifier are offered"""
        names = [option.name for option in provider.options_build("ro", 2)]
        assert names == ["roll"]

    def test_alias_match(self, provider):
        """Aliases are offered as alias views"""
        options = provider.options_build("di", 2)

        assert [option.name for option in options] == ["dice"]
        assert options[0].definition.alias_of == "roll"

    def test_options_carry_context(self, provider):
        """Macro options keep the parse context for hints"""
        option = provider.options_build("roll::1", 7)[0]

        assert isinstance(option, MacroOption)
        assert option.context.current_arg_index == 0

    def test_closing_tag_added_in_scope(self, provider):
        """Inside scoped content the closing tag leads the list"""
        options = provider.options_build("u", 1, scoped_macro_name="if")

        assert isinstance(options[0], ClosingTagOption)
        assert options[0].name == "/if"
        assert [option.name for option in options[1:]] == ["user"]


class TestFlagsArea:
    """Test options while the caret is in the flags area"""

    def test_flags_then_macros(self, provider):
        """Flags come first, then every macro"""
        options = provider.options_build("", 0)
        kinds = [type(option) for option in options]

        assert kinds[:6] == [FlagOption] * 6
        assert all(kind is MacroOption for kind in kinds[6:])

    def test_current_flag_first(self, provider):
        """The flag just typed leads the list"""
        options = provider.options_build("!?", 2)
        assert options[0].name == "?"


class TestClosingTags:
    """Test options for a typed closing tag"""

    def test_open_scope_only(self, provider):
        """With an open scoped macro only its closing tag is offered"""
        options = provider.options_build("/i", 2, scoped_macro_name="if")
        assert [option.name for option in options] == ["/if"]

    def test_scopable_prefix_match(self, provider):
        """Without a known scope, scopable macros matching the name are offered"""
        names = [option.name for option in provider.options_build("/r", 2)]

        assert "/roll" in names
        assert "/random" in names

    def test_argument_less_macros_not_scopable(self, provider):
        """Macros without arguments cannot be closed"""
        names = [option.name for option in provider.options_build("/", 1)]

        assert "/user" not in names
        assert "/if" in names

    def test_committed_value(self, provider):
        """Committing replaces the typed tag with the closed tag"""
        option = provider.options_build("/i", 2, scoped_macro_name="if")[0]
        assert option.completion_value() == "/if}}"


class TestSettings:
    """Test settings helpers used by the completion core"""

    def test_probe_split(self):
        """The caret marker is removed and becomes the offset"""
        assert AppSettings().probe_split("roll::1d|20") == ("roll::1d20", 8)

    def test_probe_without_marker(self):
        """Without a marker the caret sits at the end"""
        assert AppSettings().probe_split("roll") == ("roll", 4)

    def test_closing_tag(self):
        """Closing tags are wrapped in the delimiters"""
        assert AppSettings().closingTag_make("if") == "{{/if}}"

    def test_env_override(self, monkeypatch):
        """Settings read the MACROCOMPLETE_ environment prefix"""
        monkeypatch.setenv("MACROCOMPLETE_CARET_MARKER", "^")
        assert AppSettings().probe_split("ro^ll") == ("roll", 2)

    def test_only_read_settings_declared(self):
        """Settings carry no fields the code never reads"""
        fields = set(AppSettings.model_fields)

        assert "debug_mode" not in fields
        assert "separator" not in fields
        assert "strict_mode" in fields
