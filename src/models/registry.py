"""
Registry file entry models

Pydantic schemas for the entries of a YAML macro registry file. Keys are
camelCase in the file; unknown keys and mistyped values are rejected
before a MacroDefinition is built.
"""

from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictFloat, StrictInt, StrictStr

from .macros import ArgDef, ListDescriptor, MacroDefinition, MacroSource


class ArgEntry(BaseModel):
    """One entry of a macro's unnamedArgs list"""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    name: StrictStr
    type: Union[StrictStr, List[StrictStr]] = "string"
    optional: StrictBool = False
    default_value: Optional[Union[StrictStr, StrictInt, StrictFloat, StrictBool]] = Field(
        default=None, alias="defaultValue"
    )
    description: Optional[StrictStr] = None
    sample_value: Optional[Union[StrictStr, StrictInt, StrictFloat]] = Field(
        default=None, alias="sampleValue"
    )

    def argDef_make(self) -> ArgDef:
        """Convert to the ArgDef used by the completion core"""
        return ArgDef(
            name=self.name,
            type=self.type if isinstance(self.type, str) else tuple(self.type),
            optional=self.optional,
            default_value=None if self.default_value is None else str(self.default_value),
            description=self.description,
            sample_value=None if self.sample_value is None else str(self.sample_value),
        )


class ListEntry(BaseModel):
    """Variadic tail declaration ("list: {min: 1}")"""

    model_config = ConfigDict(extra="forbid")

    min: StrictInt = 0
    max: Optional[StrictInt] = None
    description: StrictStr = ""


class MacroEntry(BaseModel):
    """
    One entry of the top-level macros list

    Example:
        - name: weather
          minArgs: 1
          maxArgs: 2
          aliases: [wx]
          unnamedArgs: [city, {name: units, optional: true}]
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    name: StrictStr
    description: StrictStr = ""
    min_args: StrictInt = Field(default=0, alias="minArgs")
    max_args: Optional[StrictInt] = Field(default=None, alias="maxArgs")
    list_arg: Union[StrictBool, ListEntry, None] = Field(default=None, alias="list")
    unnamed_args: List[Union[StrictStr, ArgEntry]] = Field(default_factory=list, alias="unnamedArgs")
    aliases: List[StrictStr] = Field(default_factory=list)
    source: MacroSource = MacroSource.USER
    category: StrictStr = "misc"

    def definition_make(self) -> MacroDefinition:
        """
        Convert to a MacroDefinition

        maxArgs defaults to the number of declared arguments; "list: true"
        declares an unbounded tail.
        """
        arg_defs = [
            ArgDef(name=arg) if isinstance(arg, str) else arg.argDef_make()
            for arg in self.unnamed_args
        ]

        list_arg = None
        if isinstance(self.list_arg, ListEntry):
            list_arg = ListDescriptor(
                min=self.list_arg.min, max=self.list_arg.max, description=self.list_arg.description
            )
        elif self.list_arg:
            list_arg = ListDescriptor()

        return MacroDefinition(
            name=self.name,
            description=self.description,
            min_args=self.min_args,
            max_args=len(arg_defs) if self.max_args is None else self.max_args,
            list_arg=list_arg,
            unnamed_arg_defs=arg_defs,
            aliases=[*self.aliases],
            source=self.source,
            category=self.category,
        )
