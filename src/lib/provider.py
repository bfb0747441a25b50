"""
Completion provider

Reference caller for the option variants: parses the macro text at the
caret and decides which options to offer and in what order.
"""

from typing import List, Optional

from ..models.context import ParseContext
from .flags import FlagRegistry
from .log import LOG
from .macros import MacroRegistry
from .options import ClosingTagOption, CompletionOption, FlagOption, MacroOption, options_sort
from .parser import context_parse


class CompletionProvider:
    """
    Builds completion lists from the macro and flag registries

    Example:
        >>> provider = CompletionProvider(MacroRegistry(), FlagRegistry())
        >>> [option.name for option in provider.options_build("ro", 2)]
        ['roll']
    """

    def __init__(self, macros: MacroRegistry, flags: FlagRegistry) -> None:
        self.macros = macros
        self.flags = flags

    def context_get(
        self, text: str, cursor_offset: int, scoped_macro_name: Optional[str] = None
    ) -> ParseContext:
        """Parse text with this provider's flag symbols"""
        return context_parse(text, cursor_offset, self.flags.symbols(), scoped_macro_name)

    def options_build(
        self, text: str, cursor_offset: int, scoped_macro_name: Optional[str] = None
    ) -> List[CompletionOption]:
        """
        Build the sorted completion options for the caret

        Args:
            text: Text between the macro delimiters
            cursor_offset: Caret offset within text
            scoped_macro_name: Name of the open scoped macro, if any

        Returns:
            Options in display order
        """
        context = self.context_get(text, cursor_offset, scoped_macro_name)
        return self.options_forContext(context)

    def options_forContext(self, context: ParseContext) -> List[CompletionOption]:
        """Build the sorted completion options for an existing context"""
        options: List[CompletionOption]
        if context.closingTag_check():
            options = list(self.closingTags_build(context))
        elif context.is_in_flags_area:
            options = [*self.flagOptions_build(context), *self.macroOptions_build(context, prefix='')]
            LOG(f"Flags area: {len(options)} option(s)", level=3)
            # Flags keep table order ahead of macros; the current flag leads
            return options
        else:
            options = list(self.macroOptions_build(context, prefix=context.identifier))
            if context.scoped_macro_name:
                options.append(ClosingTagOption(context.scoped_macro_name))

        LOG(f"{len(options)} option(s) for {context.full_text!r}", level=3)
        return options_sort(options)

    def flagOptions_build(self, context: ParseContext) -> List[FlagOption]:
        """Flag options, the current flag first"""
        options = [FlagOption(flag) for flag in self.flags.all()]
        if context.current_flag is not None:
            options.sort(key=lambda option: option.name != context.current_flag)
        return options

    def macroOptions_build(self, context: ParseContext, prefix: str) -> List[MacroOption]:
        """Macro options whose name or alias starts with prefix"""
        options: List[MacroOption] = []
        for name in self.macros.names_list():
            if not name.startswith(prefix):
                continue
            definition = self.macros.get(name)
            if definition is not None:
                options.append(MacroOption.for_context(definition, context))
        return options

    def closingTags_build(self, context: ParseContext) -> List[ClosingTagOption]:
        """
        Closing-tag options for a typed "/name"

        Only the open scoped macro is offered when one is known; otherwise
        every scopable macro matching the typed name.
        """
        if context.scoped_macro_name:
            return [ClosingTagOption(context.scoped_macro_name)]
        prefix = context.closingTag_name()
        return [
            ClosingTagOption(definition.name)
            for definition in self.macros.macros_list()
            if definition.name.startswith(prefix) and definition.scopable_check()
        ]
