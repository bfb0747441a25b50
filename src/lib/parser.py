"""
Context parser for partially typed macros

Reconstructs the semantic position of the caret inside the text between
a pair of macro delimiters, e.g. the "!roll::1d20" of {{!roll::1d20}}.

The parser operates in a single left-to-right pass:
1. Padding: skip leading whitespace
2. Flags: consume flag symbols (a "/" followed by a name is a closing tag)
3. Segments: split the rest on "::" separators
4. Identifier: split a space-syntax argument off the first segment
5. Caret: classify the caret (flags area, argument slot, half-typed separator)

Parsing is total: every string and offset yields a ParseContext, and no
state survives between calls.

Example:
    >>> context = context_parse("roll::1d20", 10)
    >>> context.identifier
    'roll'
    >>> context.args
    ('1d20',)
    >>> context.current_arg_index
    0
"""

import re
from typing import FrozenSet, List, Optional, Tuple
from dataclasses import dataclass

from ..models.context import ParseContext, TextSpan
from .flags import DEFAULT_FLAG_SYMBOLS
from .log import LOG


# A "/" directly followed by one of these starts a closing tag, not a flag
CLOSING_TAG_START = re.compile(r'[a-zA-Z_]')

SEPARATOR = '::'


@dataclass(frozen=True)
class Segment:
    """
    Text between separators

    Attributes:
        text: Raw segment text (untrimmed)
        span: Offsets of the segment within the macro text
    """
    text: str
    span: TextSpan


@dataclass(frozen=True)
class IdentifierSplit:
    """
    Result of splitting the first segment into identifier and space argument

    Attributes:
        identifier: Identifier text before cleanup (may end in ':')
        space_arg: Space-syntax argument content, "" when absent
        has_space_after: Whitespace follows the identifier
        identifier_end: Offset right after the identifier
    """
    identifier: str
    space_arg: str
    has_space_after: bool
    identifier_end: int


class ContextParser:
    """
    Parser for the caret context of one macro token

    Handles:
    - Leading padding and whitespace between flags
    - Flag symbols, with "/name" reserved for closing tags
    - "::" separated arguments
    - A single space-separated argument ("getvar myvar")
    - Half-typed separators ("roll:")
    """

    def __init__(
        self,
        text: str,
        cursor_offset: int,
        flag_symbols: Optional[FrozenSet[str]] = None,
    ):
        """
        Initialize parser with macro text and caret offset

        Args:
            text: Text between the macro delimiters
            cursor_offset: Caret offset within text, clamped to [0, len(text)]
            flag_symbols: Valid flag symbols, defaults to the built-in flag table

        Attributes:
            text: Macro text being parsed
            cursor_offset: Clamped caret offset
            flag_symbols: Set of characters recognized as flags
            position: Current scan position in text
        """
        self.text = text
        self.cursor_offset = max(0, min(cursor_offset, len(text)))
        self.flag_symbols = DEFAULT_FLAG_SYMBOLS if flag_symbols is None else flag_symbols
        self.position = 0

    def parse(self) -> ParseContext:
        """
        Parse the macro text into a caret context

        Returns:
            ParseContext describing flags, identifier, arguments and the
            caret's position among them
        """
        self.position = 0
        padding = self.whitespace_skip()

        flags, flag_ends = self.flags_scan()
        segments, separators = self.segments_split()

        identifier_start = segments[0].span.start
        split = self.identifier_split(segments[0], has_separators=bool(separators))
        current_flag = self.currentFlag_determine(flags, flag_ends, identifier_start)

        is_typing_separator = self.separatorTyping_check(identifier_start)
        current_arg_index = self.argIndex_determine(separators, split)
        # A half-typed separator never puts the caret inside an argument
        if is_typing_separator:
            current_arg_index = -1

        args = [segment.text.strip() for segment in segments[1:]]
        if split.space_arg:
            args.insert(0, split.space_arg)

        context = ParseContext(
            full_text=self.text,
            cursor_offset=self.cursor_offset,
            padding_before=padding,
            identifier=split.identifier.rstrip(':'),
            identifier_start=identifier_start,
            is_in_flags_area=self.cursor_offset <= identifier_start,
            flags=tuple(flags),
            current_flag=current_flag,
            args=tuple(args),
            current_arg_index=current_arg_index,
            is_typing_separator=is_typing_separator,
            has_space_after_identifier=split.has_space_after,
            has_space_arg_content=bool(split.space_arg),
            separator_count=len(separators),
            separators=tuple(separators),
        )

        LOG(
            f"parse({self.text!r}, {self.cursor_offset}) -> identifier={context.identifier!r} "
            f"flags={list(context.flags)} args={list(context.args)} "
            f"arg={context.current_arg_index} sep={context.is_typing_separator}",
            level=3,
        )
        return context

    def whitespace_skip(self) -> str:
        """
        Advance position over a whitespace run

        Returns:
            The skipped whitespace
        """
        start = self.position
        while self.position < len(self.text) and self.text[self.position].isspace():
            self.position += 1
        return self.text[start:self.position]

    def closingTag_at(self, position: int) -> bool:
        """
        Check whether a closing tag ("/" + name character) starts at position

        Example:
            "/if" -> True, "/" -> False, "/ if" -> False
        """
        if self.text[position] != '/' or position + 1 >= len(self.text):
            return False
        return CLOSING_TAG_START.match(self.text[position + 1]) is not None

    def flags_scan(self) -> Tuple[List[str], List[int]]:
        """
        Consume flag symbols starting at the current position

        Whitespace between flags is skipped. Scanning stops at the first
        character that is not a flag, or at the start of a closing tag.

        Returns:
            Tuple of (flag symbols, offset right after each flag)

        Example:
            "!? roll" -> (['!', '?'], [1, 2]), position left at 3
        """
        flags: List[str] = []
        flag_ends: List[int] = []

        while self.position < len(self.text):
            char = self.text[self.position]
            if self.closingTag_at(self.position):
                break
            if char not in self.flag_symbols:
                break
            flags.append(char)
            self.position += 1
            flag_ends.append(self.position)
            self.whitespace_skip()

        return flags, flag_ends

    def currentFlag_determine(
        self, flags: List[str], flag_ends: List[int], identifier_start: int
    ) -> Optional[str]:
        """
        Pick the flag the caret is logically on

        Only the most recently typed flag can be current, and only while the
        caret sits on it or between it and the identifier.

        Args:
            flags: Flag symbols in typed order
            flag_ends: Offset right after each flag
            identifier_start: Offset where the identifier begins

        Returns:
            The last flag symbol, or None
        """
        if not flags:
            return None
        last_end = flag_ends[-1]
        if last_end - 1 <= self.cursor_offset <= identifier_start:
            return flags[-1]
        return None

    def segments_split(self) -> Tuple[List[Segment], List[TextSpan]]:
        """
        Split the text after the flags on "::" separators

        Returns:
            Tuple of (segments, separator spans). There is always at least
            one segment; the last one runs to the end of the text.

        Example:
            "roll::1d20" -> segments "roll" [0, 4) and "1d20" [6, 10),
                            separators [4, 6)
        """
        segments: List[Segment] = []
        separators: List[TextSpan] = []
        segment_start = self.position
        scan = self.position

        while scan < len(self.text):
            if self.text.startswith(SEPARATOR, scan):
                segments.append(Segment(
                    text=self.text[segment_start:scan],
                    span=TextSpan(segment_start, scan),
                ))
                separators.append(TextSpan(scan, scan + len(SEPARATOR)))
                scan += len(SEPARATOR)
                segment_start = scan
            else:
                scan += 1

        segments.append(Segment(
            text=self.text[segment_start:],
            span=TextSpan(segment_start, len(self.text)),
        ))
        return segments, separators

    def identifier_split(self, first: Segment, has_separators: bool) -> IdentifierSplit:
        """
        Separate the identifier from a space-syntax argument

        Space syntax and "::" syntax are mutually exclusive, so the split is
        only attempted when no separator exists.

        Args:
            first: First segment (identifier segment)
            has_separators: Whether any "::" separator was found

        Returns:
            IdentifierSplit

        Example:
            "getvar myvar" -> identifier "getvar", space_arg "myvar"
            "setvar "      -> identifier "setvar", space_arg "", has_space_after
            "roll :"       -> identifier "roll", space_arg "" (a separator is coming)
        """
        trimmed = first.text.lstrip()
        indent = len(first.text) - len(trimmed)
        whitespace = re.search(r'\s', trimmed)

        identifier = trimmed.rstrip()
        space_arg = ''
        has_space_after = False

        if whitespace and whitespace.start() > 0 and not has_separators:
            identifier = trimmed[:whitespace.start()]
            after = trimmed[whitespace.start():]
            has_space_after = len(after) > 0
            content = after.strip()
            if content and not content.startswith(':'):
                space_arg = content

        return IdentifierSplit(
            identifier=identifier,
            space_arg=space_arg,
            has_space_after=has_space_after,
            identifier_end=first.span.start + indent + len(identifier),
        )

    def separatorTyping_check(self, identifier_start: int) -> bool:
        """
        Check whether the caret sits right after a lone ':'

        The caret must follow exactly one colon: not one inside a "::" pair
        and not the second colon of a completed pair.
        """
        cursor = self.cursor_offset
        if identifier_start >= len(self.text) or cursor <= identifier_start:
            return False
        if self.text[cursor - 1] != ':':
            return False
        if self.text[cursor:cursor + 1] == ':':
            return False
        return cursor < 2 or self.text[cursor - 2] != ':'

    def argIndex_determine(self, separators: List[TextSpan], split: IdentifierSplit) -> int:
        """
        Find the argument slot holding the caret

        Args:
            separators: Separator spans in text order
            split: Identifier/space-argument split of the first segment

        Returns:
            0-based argument index, or -1 when on the flags/identifier
        """
        if separators:
            index = -1
            for separator_index, separator in enumerate(separators):
                if self.cursor_offset >= separator.end:
                    index = separator_index
            return index

        if split.space_arg:
            return 0
        if split.has_space_after and self.cursor_offset > split.identifier_end:
            return 0
        return -1


def context_parse(
    text: str,
    cursor_offset: int,
    flag_symbols: Optional[FrozenSet[str]] = None,
    scoped_macro_name: Optional[str] = None,
) -> ParseContext:
    """
    Parse macro text at a caret offset

    Convenience wrapper around ContextParser that also attaches the open
    scope, if any.

    Args:
        text: Text between the macro delimiters
        cursor_offset: Caret offset within text
        flag_symbols: Valid flag symbols, defaults to the built-in flag table
        scoped_macro_name: Name of the open scoped macro, if the caret is in
                           scoped content (from an external tracker)

    Returns:
        ParseContext for the caret
    """
    context = ContextParser(text, cursor_offset, flag_symbols).parse()
    if scoped_macro_name is not None:
        context = context.scope_attach(scoped_macro_name)
    return context
