"""
Arity diagnostics tests

Tests the warning classification for too many arguments, misuse of space
syntax and arguments on argument-less macros.
"""

from macrocomplete.lib.diagnostics import arityWarning_get, warning_for
from macrocomplete.lib.parser import context_parse
from macrocomplete.models.context import ParseContext
from macrocomplete.models.macros import ListDescriptor, MacroDefinition
from macrocomplete.models.options import ArityWarningKind


def macro_make(max_args: int = 0, min_args: int = 0, list_arg=None) -> MacroDefinition:
    """Minimal definition with the given arity"""
    return MacroDefinition(name="test", min_args=min_args, max_args=max_args, list_arg=list_arg)


class TestTooManyArguments:
    """Test the argument count limit"""

    def test_over_limit_singular(self):
        """Two args on a one-argument macro mention 'up to 1 argument'"""
        context = ParseContext(full_text="test::a::b", cursor_offset=10, args=("a", "b"))
        warning = arityWarning_get(macro_make(max_args=1), context)

        assert warning.kind is ArityWarningKind.TOO_MANY_ARGS
        assert "up to 1 argument," in warning.message
        assert "2 provided" in warning.message

    def test_over_limit_plural(self):
        """The limit is pluralized above one"""
        context = context_parse("test::a::b::c", 13)
        message = warning_for(macro_make(max_args=2), context)
        assert "up to 2 arguments" in message

    def test_over_limit_zero(self):
        """Args on a macro without arguments say 'no arguments'"""
        context = context_parse("test::a", 7)
        message = warning_for(macro_make(max_args=0), context)

        assert "accepts no arguments" in message
        assert message.startswith("Too many arguments")

    def test_list_macro_never_too_many(self):
        """Macros with a list accept any number of arguments"""
        context = context_parse("test::a::b::c::d", 16)
        assert warning_for(macro_make(list_arg=ListDescriptor()), context) is None

    def test_within_limit(self):
        """No warning at or under the limit"""
        context = context_parse("test::a::b", 10)
        assert warning_for(macro_make(max_args=2), context) is None


class TestSpaceSyntax:
    """Test warnings for space-separated arguments"""

    def test_space_arg_on_zero_arity(self):
        """Space content on an argument-less macro"""
        context = ParseContext(full_text="test x", cursor_offset=6, has_space_arg_content=True)
        warning = arityWarning_get(macro_make(max_args=0), context)

        assert warning.kind is ArityWarningKind.NO_ARGS_ACCEPTED
        assert "does not accept any arguments" in warning.message

    def test_space_arg_on_three_arg_macro(self):
        """Space syntax is limited to macros with up to two arguments"""
        context = context_parse("test x", 6)
        warning = arityWarning_get(macro_make(max_args=3), context)

        assert warning.kind is ArityWarningKind.SPACE_SYNTAX_LIMIT
        assert "{{test::arg1::arg2}}" in warning.message

    def test_space_arg_on_two_arg_macro(self):
        """Two-argument macros may use space syntax"""
        context = context_parse("test x", 6)
        assert warning_for(macro_make(max_args=2), context) is None

    def test_space_arg_on_list_macro(self):
        """List macros may use space syntax whatever their arity"""
        context = context_parse("test x", 6)
        assert warning_for(macro_make(max_args=3, list_arg=ListDescriptor()), context) is None

    def test_trailing_space_only(self):
        """A space without content raises no warning"""
        context = context_parse("test ", 5)

        assert context.has_space_after_identifier is True
        assert warning_for(macro_make(max_args=0), context) is None


class TestSeparatorOnZeroArity:
    """Test '::' on macros that take no arguments"""

    def test_separator_without_args(self):
        """A separator count alone triggers the no-arguments warning"""
        context = ParseContext(full_text="test::", cursor_offset=6, separator_count=1)
        warning = arityWarning_get(macro_make(max_args=0), context)

        assert warning.kind is ArityWarningKind.NO_ARGS_ACCEPTED
        assert warning.message == "This macro does not accept any arguments."

    def test_separator_on_macro_with_args(self):
        """Separators are fine on macros with arguments"""
        context = context_parse("test::", 6)
        assert warning_for(macro_make(max_args=1), context) is None


class TestPrecedence:
    """Only the first matching rule is reported"""

    def test_too_many_beats_space_syntax(self):
        """Count check runs before the space-syntax check"""
        context = ParseContext(
            full_text="test a", cursor_offset=6, args=("a", "b", "c", "d"), has_space_arg_content=True,
        )
        warning = arityWarning_get(macro_make(max_args=3), context)
        assert warning.kind is ArityWarningKind.TOO_MANY_ARGS

    def test_no_context_no_warning(self):
        """Without a context there is nothing to check"""
        assert arityWarning_get(macro_make(max_args=0), None) is None

    def test_warning_str_is_message(self):
        """str() of a warning is its message"""
        context = ParseContext(full_text="test::", cursor_offset=6, separator_count=1)
        warning = arityWarning_get(macro_make(max_args=0), context)
        assert str(warning) == warning.message
