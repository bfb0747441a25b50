"""
Macro flag table

Single-character flags typed before a macro identifier, e.g. the "!" in
{{!roll::1d20}}. The parser consults the symbol set to recognize flags;
flag completion options render the full definitions.
"""

from typing import Dict, FrozenSet, List, Optional

from ..models.macros import MacroFlagDefinition


class FlagRegistry:
    """
    Registry of macro flag definitions

    Keeps flags in registration order so completion lists are stable.
    """

    def __init__(self) -> None:
        """Initialize the flag registry and register the built-in flags"""
        self.specs: Dict[str, MacroFlagDefinition] = {}
        self.builtinFlags_register()

    def register(self, flag: MacroFlagDefinition) -> None:
        """Register a flag definition (replaces any flag with the same symbol)"""
        if len(flag.symbol) != 1:
            raise ValueError(f"Flag symbol must be a single character, got {flag.symbol!r}")
        self.specs[flag.symbol] = flag

    def get(self, symbol: str) -> Optional[MacroFlagDefinition]:
        """Get flag definition by symbol"""
        return self.specs.get(symbol)

    def all(self) -> List[MacroFlagDefinition]:
        """All flag definitions in registration order"""
        return list(self.specs.values())

    def symbols(self) -> FrozenSet[str]:
        """Set of valid flag symbols"""
        return frozenset(self.specs)

    def builtinFlags_register(self) -> None:
        """Register the built-in flags"""
        self.register(MacroFlagDefinition(
            symbol='!',
            name='Immediate',
            description='Resolve this macro before any other macro in the text.',
            implemented=False,
        ))
        self.register(MacroFlagDefinition(
            symbol='?',
            name='Delayed',
            description='Resolve this macro after all other macros in the text.',
            implemented=False,
        ))
        self.register(MacroFlagDefinition(
            symbol='~',
            name='Re-evaluate',
            description='Evaluate the macro again on every use instead of caching its value.',
            implemented=False,
        ))
        self.register(MacroFlagDefinition(
            symbol='>',
            name='Filter',
            description='Pipe the macro output through a filter.',
            implemented=False,
        ))
        self.register(MacroFlagDefinition(
            symbol='/',
            name='Closing Block',
            description='Close a scoped macro opened earlier, e.g. {{/if}}.',
            implemented=True,
            affects_parser=True,
        ))
        self.register(MacroFlagDefinition(
            symbol='#',
            name='Preserve Whitespace',
            description='Keep whitespace of scoped content instead of trimming it.',
            implemented=True,
            affects_parser=True,
        ))


# Symbols of the built-in table, used by the parser when no set is supplied
DEFAULT_FLAG_SYMBOLS: FrozenSet[str] = FlagRegistry().symbols()
