"""
Macro and flag definition models

Read-only descriptions of the macros and flags a registry knows about.
The completion core never mutates these; it only reads arity, argument
metadata and presentation text from them.
"""

from enum import Enum
from dataclasses import dataclass, field, replace
from typing import List, Optional, Tuple, Union


class MacroSource(Enum):
    """
    Where a macro definition came from

    Rendered as the source glyph on list rows and in the detail panel.
    """
    BUILTIN = "builtin"        # shipped with the registry
    EXTENSION = "extension"    # registered by an extension
    USER = "user"              # loaded from a user registry file


@dataclass
class ArgDef:
    """
    Declaration of one unnamed (positional) macro argument

    Attributes:
        name: Argument display name (e.g., "formula")
        type: Accepted type, or a tuple of accepted types
        optional: Whether the argument may be omitted
        default_value: Value used when an optional argument is omitted
        description: Free-text help for the argument
        sample_value: Example value shown as "(e.g. ...)"

    Example:
        ArgDef(name="formula", type="string", sample_value="1d20")
    """
    name: str
    type: Union[str, Tuple[str, ...]] = "string"
    optional: bool = False
    default_value: Optional[str] = None
    description: Optional[str] = None
    sample_value: Optional[str] = None

    def types_list(self) -> List[str]:
        """Accepted types as a list, whether one or many were declared"""
        if isinstance(self.type, str):
            return [self.type]
        return list(self.type)


@dataclass
class ListDescriptor:
    """
    Variadic tail accepted after a macro's unnamed arguments

    Attributes:
        min: Minimum number of list items
        max: Maximum number of list items, None for unbounded
        description: Help text for the list items
    """
    min: int = 0
    max: Optional[int] = None
    description: str = ""


@dataclass
class MacroDefinition:
    """
    Specification of a macro as held by the registry

    Attributes:
        name: Macro name as typed after the flags (e.g., "roll")
        description: One-line human-readable description
        min_args: Minimum number of unnamed arguments
        max_args: Maximum number of unnamed arguments (min_args <= max_args)
        list_arg: Variadic tail descriptor, None if the macro has no list
        unnamed_arg_defs: Declarations for the unnamed arguments, in order
        aliases: Alternative names resolving to this macro
        source: Where the definition came from
        alias_of: Primary macro name when this definition is an alias view
        category: Free-form grouping used by the detail panel

    Invariant:
        len(unnamed_arg_defs) <= max_args
    """
    name: str
    description: str = ""
    min_args: int = 0
    max_args: int = 0
    list_arg: Optional[ListDescriptor] = None
    unnamed_arg_defs: List[ArgDef] = field(default_factory=list)
    aliases: List[str] = field(default_factory=list)
    source: MacroSource = MacroSource.BUILTIN
    alias_of: Optional[str] = None
    category: str = "misc"

    def takesNoArgs_check(self) -> bool:
        """True for macros that accept neither unnamed arguments nor a list"""
        return self.min_args == 0 and self.max_args == 0 and self.list_arg is None

    def scopable_check(self) -> bool:
        """
        Check whether the macro can be used as a scoped block

        Scoped content is passed as the final argument, so the macro must
        accept at least one argument (or a list tail).
        """
        return self.max_args > 0 or self.list_arg is not None

    def alias_view(self, alias: str) -> "MacroDefinition":
        """Copy of this definition presented under one of its aliases"""
        return replace(self, name=alias, alias_of=self.name)


@dataclass
class MacroFlagDefinition:
    """
    Specification of a single-character macro flag

    Attributes:
        symbol: The flag character typed before the identifier (e.g., "!")
        name: Short flag name (e.g., "Immediate")
        description: What the flag does
        implemented: False for flags reserved for a future release
        affects_parser: Whether the flag changes how the macro is parsed
    """
    symbol: str
    name: str
    description: str
    implemented: bool = True
    affects_parser: bool = False
