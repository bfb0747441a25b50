"""
macrocomplete - Context-aware completion for macro template text

Parses partially typed {{macro::args}} tokens and builds completion options.
"""

__version__ = "1.0.0"

from .parser import ContextParser, context_parse
from .diagnostics import arityWarning_get, warning_for
from .flags import FlagRegistry
from .macros import MacroRegistry, RegistryError
from .options import MacroOption, FlagOption, ClosingTagOption, CompletionOption, options_sort
from .provider import CompletionProvider
from .report import ReportWriter
from .log import LOG, state_connectToLogger

__all__ = [
    "ContextParser",
    "context_parse",
    "arityWarning_get",
    "warning_for",
    "FlagRegistry",
    "MacroRegistry",
    "RegistryError",
    "MacroOption",
    "FlagOption",
    "ClosingTagOption",
    "CompletionOption",
    "options_sort",
    "CompletionProvider",
    "ReportWriter",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
