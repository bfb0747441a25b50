"""
Arity diagnostics

Compares the arguments collected in a ParseContext with a macro's arity
contract. Problems are reported as warnings for the detail panel; they
never block completion.
"""

from typing import Optional

from ..config import appsettings
from ..models.context import ParseContext
from ..models.macros import MacroDefinition
from ..models.options import ArityWarning, ArityWarningKind

# Space syntax gives one argument; scoped content can supply a second
SPACE_SYNTAX_MAX_ARGS = 2


def arityWarning_get(definition: MacroDefinition, context: Optional[ParseContext]) -> Optional[ArityWarning]:
    """
    Classify the arity problem of a macro at the current caret, if any

    Rules are checked in order and the first match wins:
        1. More arguments than max_args (macros without a list only)
        2. Space-syntax argument on a macro that takes none, or on a macro
           with more than two arguments and no list
        3. "::" arguments on a macro that takes none

    Args:
        definition: Macro being completed
        context: Parse context of the macro text, None when unknown

    Returns:
        ArityWarning, or None when the arguments are acceptable
    """
    if context is None:
        return None

    arg_count = len(context.args)
    max_args = definition.max_args
    has_list = definition.list_arg is not None

    if not has_list and arg_count > max_args:
        if max_args == 0:
            limit = "no arguments"
        else:
            limit = f"up to {max_args} argument{'' if max_args == 1 else 's'}"
        return ArityWarning(
            ArityWarningKind.TOO_MANY_ARGS,
            f"Too many arguments: this macro accepts {limit}, but {arg_count} provided.",
        )

    if context.has_space_arg_content:
        if max_args == 0:
            return ArityWarning(
                ArityWarningKind.NO_ARGS_ACCEPTED,
                "This macro does not accept any arguments. "
                "Remove the space or use a different macro.",
            )
        if not has_list and max_args > SPACE_SYNTAX_MAX_ARGS:
            example = appsettings.token_wrap(f"{definition.name}::arg1::arg2")
            return ArityWarning(
                ArityWarningKind.SPACE_SYNTAX_LIMIT,
                f"Space-separated syntax only works for macros with up to "
                f"{SPACE_SYNTAX_MAX_ARGS} arguments. Use :: separators instead: {example}",
            )

    if context.separator_count > 0 and max_args == 0:
        return ArityWarning(
            ArityWarningKind.NO_ARGS_ACCEPTED,
            "This macro does not accept any arguments.",
        )

    return None


def warning_for(definition: MacroDefinition, context: Optional[ParseContext]) -> Optional[str]:
    """Warning message for a macro at the current caret, or None"""
    warning = arityWarning_get(definition, context)
    return warning.message if warning else None
