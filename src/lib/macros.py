"""
Macro registry

Holds macro definitions keyed by name and alias. Ships a built-in set and
can load additional definitions from a YAML registry file:

    macros:
      - name: weather
        description: Current weather for a city
        minArgs: 1
        maxArgs: 1
        aliases: [wx]
        unnamedArgs:
          - name: city
            type: string
            sampleValue: Berlin
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from pydantic import ValidationError

from ..models.macros import ArgDef, ListDescriptor, MacroDefinition
from ..models.registry import MacroEntry
from .log import LOG


class RegistryError(Exception):
    """Raised when a registry file cannot be loaded or holds invalid definitions"""
    pass


class MacroRegistry:
    """
    Registry of macro definitions

    Maps macro names (and aliases) to MacroDefinition objects. Alias lookups
    return an alias view whose alias_of names the primary macro.
    """

    def __init__(self, builtins: bool = True) -> None:
        """
        Initialize the macro registry

        Args:
            builtins: Register the built-in macros
        """
        self.specs: Dict[str, MacroDefinition] = {}
        self.aliases: Dict[str, str] = {}
        if builtins:
            self.coreMacros_register()
            self.variableMacros_register()
            self.randomMacros_register()
            self.scopedMacros_register()

    def register(self, definition: MacroDefinition) -> None:
        """
        Register a macro definition

        Raises:
            RegistryError: If the arity contract is inconsistent
        """
        definition_validate(definition)
        self.specs[definition.name] = definition
        for alias in definition.aliases:
            self.aliases[alias] = definition.name

    def get(self, name: str) -> Optional[MacroDefinition]:
        """
        Get macro definition by name or alias

        Returns:
            The definition, an alias view of it, or None if unknown
        """
        if name in self.specs:
            return self.specs[name]
        primary = self.aliases.get(name)
        if primary is not None:
            return self.specs[primary].alias_view(name)
        return None

    def macros_list(self) -> List[MacroDefinition]:
        """Primary macro definitions sorted by name"""
        return [self.specs[name] for name in sorted(self.specs)]

    def names_list(self) -> List[str]:
        """All names and aliases, sorted"""
        return sorted([*self.specs, *self.aliases])

    def __len__(self) -> int:
        return len(self.specs)

    def __contains__(self, name: str) -> bool:
        return name in self.specs or name in self.aliases

    def registry_loadYAML(self, path: Union[str, Path]) -> int:
        """
        Load macro definitions from a YAML registry file

        Definitions default to source "user". Later definitions replace
        earlier ones with the same name.

        Args:
            path: Path to the YAML file

        Returns:
            Number of definitions loaded

        Raises:
            RegistryError: On unreadable YAML or invalid definitions
        """
        path = Path(path)
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data: Any = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise RegistryError(f"Failed to parse {path.name}: {e}")
        except OSError as e:
            raise RegistryError(f"Failed to read {path}: {e}")

        if data is None:
            data = {}
        if not isinstance(data, dict) or not isinstance(data.get('macros', []), list):
            raise RegistryError(f"{path.name}: expected a top-level 'macros' list")

        count = 0
        for index, entry in enumerate(data.get('macros', [])):
            try:
                definition = definition_fromDict(entry)
                self.register(definition)
            except RegistryError as e:
                raise RegistryError(f"{path.name}: macro #{index + 1}: {e}")
            LOG(f"Registered macro '{definition.name}' from {path.name}", level=3)
            count += 1

        LOG(f"Loaded {count} macro(s) from {path}", level=2)
        return count

    def coreMacros_register(self) -> None:
        """Register argument-less core macros"""
        self.register(MacroDefinition(
            name='user',
            description='Name of the current user persona.',
            category='names',
        ))
        self.register(MacroDefinition(
            name='char',
            description='Name of the current character.',
            category='names',
        ))
        self.register(MacroDefinition(
            name='time',
            description='Current local time.',
            category='time',
        ))
        self.register(MacroDefinition(
            name='newline',
            description='Inserts a newline.',
            aliases=['nl'],
            category='text',
        ))
        self.register(MacroDefinition(
            name='trim',
            description='Trims newlines surrounding this macro.',
            category='text',
        ))

    def variableMacros_register(self) -> None:
        """Register variable access macros"""
        name_arg = ArgDef(
            name='name', type='string',
            description='Variable name.', sample_value='score',
        )
        self.register(MacroDefinition(
            name='getvar',
            description='Value of a local variable.',
            min_args=1, max_args=1,
            unnamed_arg_defs=[name_arg],
            category='variables',
        ))
        self.register(MacroDefinition(
            name='setvar',
            description='Sets a local variable. Returns nothing.',
            min_args=2, max_args=2,
            unnamed_arg_defs=[
                name_arg,
                ArgDef(name='value', type=('string', 'number'),
                       description='New value.', sample_value='10'),
            ],
            category='variables',
        ))
        self.register(MacroDefinition(
            name='addvar',
            description='Adds to a local variable. Returns nothing.',
            min_args=2, max_args=3,
            unnamed_arg_defs=[
                name_arg,
                ArgDef(name='value', type=('string', 'number'),
                       description='Value to add or append.', sample_value='1'),
                ArgDef(name='separator', type='string', optional=True,
                       default_value='', description='Inserted between appended strings.'),
            ],
            category='variables',
        ))

    def randomMacros_register(self) -> None:
        """Register dice and random choice macros"""
        self.register(MacroDefinition(
            name='roll',
            description='Rolls dice and returns the total.',
            min_args=1, max_args=1,
            unnamed_arg_defs=[
                ArgDef(name='formula', type='string',
                       description='Dice formula.', sample_value='1d20'),
            ],
            aliases=['dice'],
            category='random',
        ))
        self.register(MacroDefinition(
            name='random',
            description='Picks a random item from the list on every evaluation.',
            list_arg=ListDescriptor(min=1, description='Items to choose from.'),
            category='random',
        ))
        self.register(MacroDefinition(
            name='pick',
            description='Picks a random item from the list, stable for the chat.',
            list_arg=ListDescriptor(min=1, description='Items to choose from.'),
            category='random',
        ))

    def scopedMacros_register(self) -> None:
        """Register macros usually written as scoped blocks"""
        self.register(MacroDefinition(
            name='if',
            description='Outputs the content only when the condition is truthy.',
            min_args=2, max_args=2,
            unnamed_arg_defs=[
                ArgDef(name='condition', type=('string', 'macro'),
                       description='Value or macro name to test.', sample_value='char'),
                ArgDef(name='content', type='string',
                       description='Content to output when the condition holds.'),
            ],
            category='logic',
        ))


def definition_validate(definition: MacroDefinition) -> None:
    """
    Check the arity contract of a definition

    Raises:
        RegistryError: If min_args > max_args, counts are negative, or more
                       argument declarations than max_args exist
    """
    if not definition.name:
        raise RegistryError("macro name must not be empty")
    if definition.min_args < 0 or definition.max_args < 0:
        raise RegistryError(f"'{definition.name}': argument counts must be non-negative")
    if definition.min_args > definition.max_args:
        raise RegistryError(
            f"'{definition.name}': minArgs ({definition.min_args}) exceeds maxArgs ({definition.max_args})"
        )
    if len(definition.unnamed_arg_defs) > definition.max_args:
        raise RegistryError(
            f"'{definition.name}': {len(definition.unnamed_arg_defs)} argument declarations "
            f"but maxArgs is {definition.max_args}"
        )


def definition_fromDict(entry: Any) -> MacroDefinition:
    """
    Build a MacroDefinition from a registry file entry

    Raises:
        RegistryError: On unknown keys or malformed values
    """
    try:
        return MacroEntry.model_validate(entry).definition_make()
    except ValidationError as e:
        raise RegistryError(validationError_format(e))


def validationError_format(error: ValidationError) -> str:
    """
    One-line summary of a pydantic ValidationError

    Example:
        "unknown key 'colour'; maxArgs: Input should be a valid integer"
    """
    messages = []
    for detail in error.errors():
        where = '.'.join(str(part) for part in detail['loc'])
        if detail['type'] == 'extra_forbidden':
            messages.append(f"unknown key '{where}'")
        elif where:
            messages.append(f"{where}: {detail['msg']}")
        else:
            messages.append(detail['msg'])
    return '; '.join(messages)
