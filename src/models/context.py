"""
Parse context models

Immutable values describing where the caret sits inside a partially typed
macro. A fresh ParseContext is produced for every keystroke.
"""

from dataclasses import dataclass, replace
from typing import Optional, Tuple


@dataclass(frozen=True)
class TextSpan:
    """
    Half-open [start, end) range of offsets into the macro text

    Example:
        In "roll::1d20" the separator occupies TextSpan(start=4, end=6)
    """
    start: int
    end: int


@dataclass(frozen=True)
class ParseContext:
    """
    Semantic position of the caret inside macro text

    Returned by ContextParser.parse(). Offsets are relative to the text
    between the macro delimiters.

    Attributes:
        full_text: The raw macro text (without delimiters)
        cursor_offset: Caret offset within full_text
        padding_before: Leading whitespace run
        identifier: Macro name with flags, whitespace and trailing colons stripped
        identifier_start: Offset where the identifier segment begins
        is_in_flags_area: Caret is at or before identifier_start
        flags: Flag symbols typed before the identifier, in order
        current_flag: Most recently typed flag while the caret is on it, else None
        args: Positional arguments collected so far (trimmed); a space-syntax
              argument is always index 0
        current_arg_index: Argument slot holding the caret, -1 when on the
                           flags/identifier or mid-separator
        is_typing_separator: Caret sits right after a lone ':'
        has_space_after_identifier: Whitespace follows the identifier
        has_space_arg_content: A space-syntax argument has real content
        separator_count: Number of '::' tokens in the whole text
        separators: Offsets of every '::' token
        is_in_scoped_content: Caret is inside an open scoped block
        scoped_macro_name: Name of that scoped macro, if any

    Example:
        For "roll::1d20" with caret at 10:
        ParseContext(identifier="roll", args=("1d20",), current_arg_index=0,
                     separator_count=1, ...)
    """
    full_text: str
    cursor_offset: int
    padding_before: str = ""
    identifier: str = ""
    identifier_start: int = 0
    is_in_flags_area: bool = True
    flags: Tuple[str, ...] = ()
    current_flag: Optional[str] = None
    args: Tuple[str, ...] = ()
    current_arg_index: int = -1
    is_typing_separator: bool = False
    has_space_after_identifier: bool = False
    has_space_arg_content: bool = False
    separator_count: int = 0
    separators: Tuple[TextSpan, ...] = ()
    is_in_scoped_content: bool = False
    scoped_macro_name: Optional[str] = None

    def scope_attach(self, macro_name: Optional[str]) -> "ParseContext":
        """
        Thread scoped-block information from an external tracker

        Args:
            macro_name: Name of the open scoped macro, or None

        Returns:
            New ParseContext with the scoped fields set
        """
        return replace(
            self,
            is_in_scoped_content=macro_name is not None,
            scoped_macro_name=macro_name,
        )

    def closingTag_check(self) -> bool:
        """
        True when the text being typed is a closing tag

        Either "/name" (never scanned as a flag) or a bare "/" with nothing
        typed after it yet.
        """
        if self.identifier.startswith("/"):
            return True
        return self.flags == ("/",) and not self.identifier

    def closingTag_name(self) -> str:
        """Macro name typed after the closing slash ("" when none yet)"""
        return self.identifier[1:] if self.identifier.startswith("/") else ""
