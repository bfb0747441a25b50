"""
Shared macro definition rendering

Signature formatting, the definition detail panel, source/alias glyphs and
the generic option row. Completion options reuse these so the list and the
detail panel look the same everywhere macros are shown.
"""

from typing import List, Optional

from ..config import appsettings
from ..models.macros import ArgDef, MacroDefinition, MacroSource
from .nodes import UINode, fragment, icon, node
from .parser import SEPARATOR


SOURCE_ICONS = {
    MacroSource.BUILTIN: ('fa-cube', 'Built-in macro'),
    MacroSource.EXTENSION: ('fa-puzzle-piece', 'Registered by an extension'),
    MacroSource.USER: ('fa-user', 'User-defined macro'),
}


def argument_format(arg: Optional[ArgDef], index: int) -> str:
    """Signature text for one unnamed argument ("name" or "[name]" if optional)"""
    name = arg.name if arg else f"arg{index + 1}"
    return f"[{name}]" if arg and arg.optional else name


def signature_format(definition: MacroDefinition) -> str:
    """
    Format the display signature of a macro

    Example:
        roll     -> "{{roll::formula}}"
        addvar   -> "{{addvar::name::value::[separator]}}"
        random   -> "{{random::...}}"
        user     -> "{{user}}"
    """
    parts = [definition.name]
    for index in range(definition.max_args):
        arg = definition.unnamed_arg_defs[index] if index < len(definition.unnamed_arg_defs) else None
        parts.append(argument_format(arg, index))
    if definition.list_arg is not None:
        parts.append('...')
    return appsettings.token_wrap(SEPARATOR.join(parts))


def sourceIndicator_make(definition: MacroDefinition) -> UINode:
    """Glyph showing where the macro definition came from"""
    icon_class, title = SOURCE_ICONS.get(definition.source, ('fa-question', 'Unknown source'))
    indicator = icon('fa-solid', icon_class, 'macro-source-indicator', title=title)
    indicator.attrs['data-source'] = definition.source.value
    return indicator


def aliasIndicator_make(definition: MacroDefinition) -> Optional[UINode]:
    """Glyph marking an alias view, or None for a primary definition"""
    if definition.alias_of is None:
        return None
    return icon(
        'fa-solid', 'fa-link', 'macro-alias-indicator',
        title=f"Alias of {definition.alias_of}",
    )


def item_make(
    name: str,
    type_icon: str,
    display_name: str,
    help_text: str,
    option_type: str,
) -> UINode:
    """
    Generic completion list row

    Args:
        name: Completion match key (data-name)
        type_icon: Glyph shown in the type column
        display_name: Text shown in the name column
        help_text: Description shown in the help column
        option_type: Variant tag (data-option-type)

    Returns:
        <li> node: type, specs/name, stopgap, help
    """
    row = node('li', 'item', data_name=name, data_option_type=option_type)
    row.append(node('span', 'type', 'monospace', text=type_icon))
    row.append(node('span', 'specs').append(node('span', 'name', 'monospace', text=display_name)))
    row.append(node('span', 'stopgap'))
    row.append(node('span', 'help').append(node('span', 'helpContent', text=help_text)))
    return row


def argumentRows_render(definition: MacroDefinition, active_arg_index: int) -> List[UINode]:
    """Rows of the argument table, marking the active slot"""
    rows: List[UINode] = []
    for index in range(definition.max_args):
        arg = definition.unnamed_arg_defs[index] if index < len(definition.unnamed_arg_defs) else None
        row = node('li', 'macro-arg')
        if index == active_arg_index:
            row.class_add('current')
        row.append(node('code', text=argument_format(arg, index)))
        if arg is not None:
            row.append(node('span', 'macro-arg-type', text=' | '.join(arg.types_list())))
            if arg.description:
                row.append(node('span', 'macro-arg-desc', text=arg.description))
        rows.append(row)

    if definition.list_arg is not None:
        row = node('li', 'macro-arg', 'macro-arg-list')
        if active_arg_index >= definition.max_args:
            row.class_add('current')
        row.append(node('code', text='...'))
        bounds = f"min {definition.list_arg.min}"
        if definition.list_arg.max is not None:
            bounds += f", max {definition.list_arg.max}"
        row.append(node('span', 'macro-arg-type', text=f"list ({bounds})"))
        if definition.list_arg.description:
            row.append(node('span', 'macro-arg-desc', text=definition.list_arg.description))
        rows.append(row)
    return rows


def details_render(definition: MacroDefinition, active_arg_index: int = -1) -> UINode:
    """
    Render the definition detail panel

    Args:
        definition: Macro to describe
        active_arg_index: Argument slot to highlight, -1 for none

    Returns:
        <div class="macro-details"> node
    """
    details = node('div', 'macro-details')

    header = node('h3', 'macro-details-header')
    header.append(node('code', text=signature_format(definition)))
    details.append(header)

    details.append(node('p', 'macro-details-desc', text=definition.description or 'No description.'))

    rows = argumentRows_render(definition, active_arg_index)
    if rows:
        details.append(node('ul', 'macro-details-args').append(*rows))
    else:
        details.append(node('p', 'macro-details-noargs', text='Takes no arguments.'))

    if definition.alias_of is not None:
        details.append(node('p', 'macro-details-alias').append(
            'Alias of ', node('code', text=appsettings.token_wrap(definition.alias_of)),
        ))
    elif definition.aliases:
        aliases = fragment()
        for position, alias in enumerate(definition.aliases):
            if position:
                aliases.append(', ')
            aliases.append(node('code', text=alias))
        details.append(node('p', 'macro-details-aliases').append('Aliases: ', aliases))

    details.append(node('p', 'macro-details-source').append(
        sourceIndicator_make(definition),
        f" {definition.source.value} · {definition.category}",
    ))
    return details
