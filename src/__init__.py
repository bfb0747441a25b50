"""
macrocomplete - Context-aware completion for macro template text

Parses partially typed {{macro::args}} tokens as the user types and builds
the completion options (macros, flags, closing tags) for the caret.
"""

__version__ = "1.0.0"

from .lib import (
    ContextParser,
    context_parse,
    warning_for,
    MacroRegistry,
    FlagRegistry,
    CompletionProvider,
    LOG,
    state_connectToLogger,
)

__all__ = [
    "ContextParser",
    "context_parse",
    "warning_for",
    "MacroRegistry",
    "FlagRegistry",
    "CompletionProvider",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
