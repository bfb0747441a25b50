"""
Completion option variants

The completion list offers three kinds of option while a macro is typed:

- MacroOption: a macro definition, optionally tied to the caret context
- FlagOption: a flag symbol typed before the identifier
- ClosingTagOption: "/name" closing an open scoped macro

All three expose the same surface (name, render_item, render_details,
value_provider, make_selectable, sort_priority). They are built fresh for
every list rebuild and never change after construction.
"""

from typing import Callable, Iterable, List, Optional, Union

from ..config import appsettings
from ..models.context import ParseContext
from ..models.macros import MacroDefinition, MacroFlagDefinition
from ..models.options import ArityWarning, MacroPresentation
from .browser import aliasIndicator_make, details_render, item_make, signature_format, sourceIndicator_make
from .diagnostics import arityWarning_get
from .nodes import UINode, fragment, icon, node


def nameChars_render(text: str) -> UINode:
    """Name column with one span per character (for fuzzy-match highlighting)"""
    name = node('span', 'name', 'monospace')
    for char in text:
        name.append(node('span', text=char))
    return name


class OptionBase:
    """
    Fields shared by every option variant

    Attributes:
        name: Completion match key
        type_icon: Glyph for the type column
        value_provider: Replacement text provider, None to insert the name
        make_selectable: Whether the option can be committed directly
        sort_priority: Lower sorts first, None for the neutral default
    """

    option_type = 'option'

    def __init__(self, name: str, type_icon: str) -> None:
        self.name = name
        self.type_icon = type_icon
        self.value_provider: Optional[Callable[[], str]] = None
        self.make_selectable = False
        self.sort_priority: Optional[int] = None

    def completion_value(self) -> str:
        """Text that replaces the typed identifier when the option is committed"""
        return self.value_provider() if self.value_provider else self.name

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


class MacroOption(OptionBase):
    """
    Completion option for a macro

    Build with MacroOption.for_context() while the macro itself is being
    typed, or MacroOption.for_presentation() when the macro name is offered
    as a value.
    """

    option_type = 'macro'

    def __init__(
        self,
        definition: MacroDefinition,
        context: Optional[ParseContext] = None,
        presentation: Optional[MacroPresentation] = None,
    ) -> None:
        """
        Initialize a macro option

        Args:
            definition: Macro definition to offer
            context: Caret context for argument hints and warnings
            presentation: Presentation flags (no braces, closing padding)
        """
        super().__init__(definition.name, '{}')
        self.definition = definition
        self.context = context
        self.presentation = presentation or MacroPresentation()

        # Offset of the name inside the displayed signature
        self.name_offset = 0 if self.presentation.no_braces else len(appsettings.open_delimiter)

        # Argument-less macros complete to a closed token in one commit
        if self.presentation.close_with_braces or definition.takesNoArgs_check():
            self.value_provider = self.closedToken_make
            self.make_selectable = True

    @classmethod
    def for_context(cls, definition: MacroDefinition, context: Optional[ParseContext]) -> "MacroOption":
        """Option for the macro being typed at the caret"""
        return cls(definition, context=context)

    @classmethod
    def for_presentation(cls, definition: MacroDefinition, presentation: MacroPresentation) -> "MacroOption":
        """Option for a macro name offered as a value"""
        return cls(definition, presentation=presentation)

    def closedToken_make(self) -> str:
        """Name, closing padding and closing delimiter"""
        return f"{self.definition.name}{self.presentation.padding_after}{appsettings.close_delimiter}"

    def warning_get(self) -> Optional[ArityWarning]:
        """Arity warning for the current context, if any"""
        return arityWarning_get(self.definition, self.context)

    def render_item(self) -> UINode:
        """
        Render the list row

        Layout: [type] [signature] [stopgap] [description] [alias?] [source]
        """
        row = node('li', 'item', 'macro-ac-item', data_name=self.name, data_option_type=self.option_type)
        row.append(node('span', 'type', 'monospace', text=self.type_icon))

        signature = self.definition.name if self.presentation.no_braces else signature_format(self.definition)
        row.append(node('span', 'specs').append(nameChars_render(signature)))
        row.append(node('span', 'stopgap'))
        row.append(node('span', 'help').append(
            node('span', 'helpContent', text=self.definition.description or ''),
        ))

        alias_icon = aliasIndicator_make(self.definition)
        if alias_icon is not None:
            row.append(alias_icon.class_add('macro-ac-indicator'))
        row.append(sourceIndicator_make(self.definition).class_add('macro-ac-indicator'))
        return row

    def render_details(self) -> UINode:
        """
        Render the detail panel

        Order: arity warning, scoped-content banner, argument hint (only
        without a warning), then the shared definition details.
        """
        panel = fragment()

        warning = self.warning_get()
        if warning is not None:
            panel.append(self.warning_render(warning))

        if self.context is not None and self.context.is_in_scoped_content:
            panel.append(self.scopedInfo_render())

        current_arg_index = self.context.current_arg_index if self.context is not None else -1
        if warning is None and current_arg_index >= 0:
            panel.append(self.argumentHint_render())

        details = details_render(self.definition, -1 if warning is not None else current_arg_index)
        panel.append(details.class_add('macro-ac-details'))
        return panel

    def warning_render(self, warning: ArityWarning) -> UINode:
        """Warning banner"""
        banner = node('div', 'macro-ac-warning', data_kind=warning.kind.value)
        banner.append(icon('fa-solid', 'fa-triangle-exclamation'))
        banner.append(node('span', text=warning.message))
        return banner

    def scopedInfo_render(self) -> UINode:
        """Banner shown while typing inside an open scoped macro"""
        macro_name = self.context.scoped_macro_name if self.context else None
        info = node('div', 'macro-ac-scoped-info')
        info.append(icon('fa-solid', 'fa-layer-group'))
        info.append(node('span').append(
            'Typing ', node('strong', text='scoped content'), ' for ',
            node('code', text=appsettings.token_wrap(macro_name or '')),
            '. Close with ',
            node('code', text=appsettings.closingTag_make(macro_name or '')),
        ))
        return info

    def argumentHint_render(self) -> Optional[UINode]:
        """
        Hint for the argument slot holding the caret

        Returns:
            Hint banner, or None past the last argument of a macro without a list
        """
        if self.context is None or self.context.current_arg_index < 0:
            return None

        arg_index = self.context.current_arg_index
        max_args = self.definition.max_args
        is_list_arg = arg_index >= max_args
        if is_list_arg and self.definition.list_arg is None:
            return None

        hint = node('div', 'macro-ac-arg-hint')
        hint.append(icon('fa-solid', 'fa-arrow-right'))

        if is_list_arg:
            hint.append(node('span').append(node('strong', text=f"List item {arg_index - max_args + 1}")))
            return hint

        defs = self.definition.unnamed_arg_defs
        arg = defs[arg_index] if arg_index < len(defs) else None

        label = node('span').append(node('strong', text=arg.name if arg else f"Argument {arg_index + 1}"))
        if arg is not None and arg.optional:
            if arg.default_value is not None:
                default = '<empty string>' if arg.default_value == '' else arg.default_value
                label.append(' ', node('em', text=f"(optional, default: {default})"))
            else:
                label.append(' ', node('em', text='(optional)'))
        if arg is not None and arg.type:
            types = arg.types_list()
            type_code = node('code', 'macro-ac-hint-type', text=' | '.join(types))
            if len(types) > 1:
                type_code.attrs['title'] = f"Accepts: {', '.join(types)}"
            label.append(' ', type_code)
        hint.append(label)

        if arg is not None and arg.description:
            hint.append(node('span', 'macro-ac-hint-desc', text=f": {arg.description}"))
        if arg is not None and arg.sample_value:
            hint.append(node('span', 'macro-ac-hint-sample', text=f" (e.g. {arg.sample_value})"))
        return hint


class FlagOption(OptionBase):
    """Completion option for a macro flag"""

    option_type = 'flag'

    def __init__(self, flag: MacroFlagDefinition) -> None:
        super().__init__(flag.symbol, '🚩')
        self.flag = flag

    def render_item(self) -> UINode:
        """List row built with the generic option row ("? Delayed")"""
        help_text = self.flag.description + ('' if self.flag.implemented else ' (planned)')
        return item_make(
            self.name,
            self.type_icon,
            f"{self.flag.symbol} {self.flag.name}",
            help_text,
            self.option_type,
        )

    def render_details(self) -> UINode:
        details = node('div', 'macro-flag-details')
        details.append(node('h3', 'macro-flag-details-header').append(
            node('code', text=self.flag.symbol), f" {self.flag.name} Flag",
        ))
        details.append(node('p', 'macro-flag-details-desc', text=self.flag.description))
        status = 'Implemented' if self.flag.implemented else 'Planned for future release'
        details.append(node('p', 'macro-flag-details-status').append(
            node('strong', text='Status:'), f" {status}",
        ))
        if self.flag.affects_parser:
            details.append(node('p', 'macro-flag-details-note').append(
                node('em', text='This flag affects how the macro is parsed.'),
            ))
        return fragment(details)


class ClosingTagOption(OptionBase):
    """
    Completion option closing a scoped macro

    The name is "/macro" so it matches a typed "/mac". Committing replaces
    the typed tag with "/macro" plus the closing delimiter; the opening
    delimiter is already in the document.
    """

    option_type = 'closing-tag'

    def __init__(self, macro_name: str) -> None:
        super().__init__(f"/{macro_name}", '{/')
        self.macro_name = macro_name
        self.value_provider = self.closingTag_make
        self.make_selectable = True
        self.sort_priority = appsettings.closing_tag_priority

    def closingTag_make(self) -> str:
        return f"/{self.macro_name}{appsettings.close_delimiter}"

    def render_item(self) -> UINode:
        row = node('li', 'item', 'macro-ac-item', data_name=self.name, data_option_type=self.option_type)
        row.append(node('span', 'type', 'monospace', text=self.type_icon))
        row.append(node('span', 'specs').append(nameChars_render(appsettings.closingTag_make(self.macro_name))))
        row.append(node('span', 'stopgap'))
        row.append(node('span', 'help').append(node(
            'span', 'helpContent',
            text=f"Close the {appsettings.token_wrap(self.macro_name)} scoped macro.",
        )))
        return row

    def render_details(self) -> UINode:
        details = node('div', 'macro-closing-tag-details')
        details.append(node('h3').append(
            'Close ', node('code', text=appsettings.token_wrap(self.macro_name)),
        ))
        details.append(node('p', text=(
            f"Inserts the closing tag {appsettings.closingTag_make(self.macro_name)} to complete "
            "the scoped macro. The content between the opening and closing tags will be "
            "passed as the last argument."
        )))
        return fragment(details)


CompletionOption = Union[MacroOption, FlagOption, ClosingTagOption]


def sortKey_get(option: CompletionOption) -> tuple:
    """Sort key: priority (unset counts as the neutral default), then name"""
    priority = option.sort_priority if option.sort_priority is not None else appsettings.default_sort_priority
    return (priority, option.name)


def options_sort(options: Iterable[CompletionOption]) -> List[CompletionOption]:
    """Order options the way the completion list shows them"""
    return sorted(options, key=sortKey_get)
