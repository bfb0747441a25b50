"""
Models package for macrocomplete

Contains data structures and type definitions for parsing and completion.
"""

from .state import ProgramState, pipeline
from .context import ParseContext, TextSpan
from .macros import ArgDef, ListDescriptor, MacroDefinition, MacroFlagDefinition, MacroSource
from .options import ArityWarning, ArityWarningKind, MacroPresentation, ProbeCompletion
from .registry import ArgEntry, ListEntry, MacroEntry

__all__ = [
    "ProgramState",
    "pipeline",
    "ParseContext",
    "TextSpan",
    "ArgDef",
    "ListDescriptor",
    "MacroDefinition",
    "MacroFlagDefinition",
    "MacroSource",
    "ArityWarning",
    "ArityWarningKind",
    "MacroPresentation",
    "ProbeCompletion",
    "ArgEntry",
    "ListEntry",
    "MacroEntry",
]
