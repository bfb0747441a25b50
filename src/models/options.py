"""
Completion option data models

Presentation flags and diagnostic values consumed by the completion
option variants in lib.options.
"""

from enum import Enum
from dataclasses import dataclass, field
from typing import List, Optional

from .context import ParseContext


@dataclass(frozen=True)
class MacroPresentation:
    """
    Presentation flags for a macro option built without a parse context

    Used when a macro name is offered as a value (e.g., inside an {{if}}
    condition) rather than as the macro being typed.

    Attributes:
        no_braces: Display the bare name instead of the full signature
        padding_after: Whitespace inserted before the closing delimiter
        close_with_braces: Complete to name + padding + closing delimiter
    """
    no_braces: bool = False
    padding_after: str = ""
    close_with_braces: bool = False


class ArityWarningKind(Enum):
    """Classification of an arity diagnostic"""
    TOO_MANY_ARGS = "too_many_args"
    NO_ARGS_ACCEPTED = "no_args_accepted"
    SPACE_SYNTAX_LIMIT = "space_syntax_limit"


@dataclass(frozen=True)
class ArityWarning:
    """
    Non-fatal arity diagnostic for a macro at the current caret

    Attributes:
        kind: Which rule produced the warning
        message: Human-readable correction shown in the detail panel
    """
    kind: ArityWarningKind
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass
class ProbeCompletion:
    """
    Completion result for one probe line (CLI report)

    Attributes:
        line: Probe line as written in the probes file (with caret marker)
        context: Parse context for the probe
        options: Sorted completion options offered at the caret
        warning: Arity warning for the top macro option, if any
    """
    line: str
    context: ParseContext
    options: List = field(default_factory=list)
    warning: Optional[ArityWarning] = None
