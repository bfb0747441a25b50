"""
Macro registry tests

Tests built-in definitions, alias lookups and YAML registry loading.
"""

import pytest

from macrocomplete.lib.macros import MacroRegistry, RegistryError
from macrocomplete.models.macros import ArgDef, MacroDefinition, MacroSource


class TestBuiltins:
    """Test the built-in macro set"""

    def test_lookup_by_name(self):
        """Built-in macros resolve by name"""
        roll = MacroRegistry().get("roll")

        assert roll is not None
        assert roll.max_args == 1
        assert roll.source is MacroSource.BUILTIN

    def test_lookup_by_alias(self):
        """Aliases resolve to an alias view of the primary macro"""
        dice = MacroRegistry().get("dice")

        assert dice.name == "dice"
        assert dice.alias_of == "roll"
        assert dice.max_args == 1

    def test_unknown_name(self):
        """Unknown names return None"""
        assert MacroRegistry().get("nope") is None

    def test_macros_sorted(self):
        """macros_list returns primary definitions sorted by name"""
        names = [definition.name for definition in MacroRegistry().macros_list()]

        assert names == sorted(names)
        assert "dice" not in names

    def test_names_include_aliases(self):
        """names_list includes aliases"""
        assert "nl" in MacroRegistry().names_list()

    def test_empty_registry(self):
        """builtins=False starts empty"""
        assert len(MacroRegistry(builtins=False)) == 0

    def test_contains(self):
        """Membership covers names and aliases"""
        registry = MacroRegistry()
        assert "roll" in registry and "dice" in registry


class TestValidation:
    """Test arity contract validation on registration"""

    def test_min_over_max(self):
        """min_args above max_args is rejected"""
        with pytest.raises(RegistryError, match="exceeds maxArgs"):
            MacroRegistry(builtins=False).register(MacroDefinition(name="x", min_args=2, max_args=1))

    def test_too_many_declarations(self):
        """More argument declarations than max_args is rejected"""
        definition = MacroDefinition(name="x", max_args=1, unnamed_arg_defs=[ArgDef("a"), ArgDef("b")])
        with pytest.raises(RegistryError, match="argument declarations"):
            MacroRegistry(builtins=False).register(definition)


class TestYAMLLoading:
    """Test loading definitions from a registry file"""

    def test_load_definitions(self, tmp_path):
        """Definitions load with arguments, aliases and user source"""
        registry_file = tmp_path / "macros.yaml"
        registry_file.write_text("""
macros:
  - name: weather
    description: Current weather for a city
    minArgs: 1
    maxArgs: 2
    aliases: [wx]
    unnamedArgs:
      - name: city
        sampleValue: Berlin
      - name: units
        type: [metric, imperial]
        optional: true
        defaultValue: metric
  - name: shuffle
    list:
      min: 2
""", encoding="utf-8")

        registry = MacroRegistry(builtins=False)
        assert registry.registry_loadYAML(registry_file) == 2

        weather = registry.get("weather")
        assert weather.source is MacroSource.USER
        assert weather.unnamed_arg_defs[0].sample_value == "Berlin"
        assert weather.unnamed_arg_defs[1].types_list() == ["metric", "imperial"]
        assert weather.unnamed_arg_defs[1].default_value == "metric"
        assert registry.get("wx").alias_of == "weather"

        shuffle = registry.get("shuffle")
        assert shuffle.list_arg is not None
        assert shuffle.list_arg.min == 2
        assert shuffle.max_args == 0

    def test_max_args_defaults_to_declarations(self, tmp_path):
        """Without maxArgs the declared arguments set the maximum"""
        registry_file = tmp_path / "macros.yaml"
        registry_file.write_text("macros:\n  - name: greet\n    unnamedArgs: [who]\n", encoding="utf-8")

        registry = MacroRegistry(builtins=False)
        registry.registry_loadYAML(registry_file)
        assert registry.get("greet").max_args == 1

    def test_empty_file(self, tmp_path):
        """An empty file loads nothing"""
        registry_file = tmp_path / "macros.yaml"
        registry_file.write_text("", encoding="utf-8")
        assert MacroRegistry(builtins=False).registry_loadYAML(registry_file) == 0

    def test_invalid_yaml(self, tmp_path):
        """Malformed YAML raises RegistryError"""
        registry_file = tmp_path / "macros.yaml"
        registry_file.write_text("macros: [unclosed", encoding="utf-8")

        with pytest.raises(RegistryError, match="Failed to parse"):
            MacroRegistry().registry_loadYAML(registry_file)

    def test_unknown_key(self, tmp_path):
        """Unknown keys name the offending entry"""
        registry_file = tmp_path / "macros.yaml"
        registry_file.write_text("macros:\n  - name: x\n    colour: red\n", encoding="utf-8")

        with pytest.raises(RegistryError, match="macro #1: unknown key"):
            MacroRegistry().registry_loadYAML(registry_file)

    def test_missing_file(self, tmp_path):
        """A missing file raises RegistryError"""
        with pytest.raises(RegistryError, match="Failed to read"):
            MacroRegistry().registry_loadYAML(tmp_path / "missing.yaml")

    def test_wrong_top_level(self, tmp_path):
        """The file must hold a 'macros' list"""
        registry_file = tmp_path / "macros.yaml"
        registry_file.write_text("- name: x\n", encoding="utf-8")

        with pytest.raises(RegistryError, match="'macros' list"):
            MacroRegistry().registry_loadYAML(registry_file)


class TestEntryTypes:
    """Test that mistyped registry values are rejected, not coerced"""

    def registry_load(self, tmp_path, body):
        registry_file = tmp_path / "macros.yaml"
        registry_file.write_text("macros:\n  - name: weather\n" + body, encoding="utf-8")
        registry = MacroRegistry(builtins=False)
        registry.registry_loadYAML(registry_file)
        return registry

    def test_quoted_max_args(self, tmp_path):
        """A quoted maxArgs is a RegistryError naming the key"""
        with pytest.raises(RegistryError, match="macro #1: maxArgs"):
            self.registry_load(tmp_path, "    maxArgs: '2'\n")

    def test_quoted_min_args(self, tmp_path):
        """A quoted minArgs is a RegistryError naming the key"""
        with pytest.raises(RegistryError, match="minArgs"):
            self.registry_load(tmp_path, "    minArgs: '1'\n    maxArgs: 1\n")

    def test_plain_string_aliases(self, tmp_path):
        """A plain-string aliases value is rejected instead of split into characters"""
        with pytest.raises(RegistryError, match="aliases"):
            self.registry_load(tmp_path, "    aliases: wx\n")

    def test_plain_string_unnamed_args(self, tmp_path):
        """A plain-string unnamedArgs value is rejected instead of split into characters"""
        with pytest.raises(RegistryError, match="unnamedArgs"):
            self.registry_load(tmp_path, "    unnamedArgs: city\n")

    def test_unknown_argument_key(self, tmp_path):
        """Unknown keys inside an argument entry are reported with their path"""
        with pytest.raises(RegistryError, match="unknown key 'unnamedArgs.0"):
            self.registry_load(tmp_path, "    unnamedArgs:\n      - name: city\n        colour: red\n")

    def test_entry_not_a_mapping(self, tmp_path):
        """A bare string entry is a RegistryError"""
        registry_file = tmp_path / "macros.yaml"
        registry_file.write_text("macros:\n  - weather\n", encoding="utf-8")

        with pytest.raises(RegistryError, match="macro #1"):
            MacroRegistry(builtins=False).registry_loadYAML(registry_file)

    def test_list_true(self, tmp_path):
        """list: true declares an unbounded tail"""
        registry = self.registry_load(tmp_path, "    list: true\n")

        assert registry.get("weather").list_arg.min == 0
        assert registry.get("weather").list_arg.max is None

    def test_unknown_source(self, tmp_path):
        """Sources outside builtin, extension and user are rejected"""
        with pytest.raises(RegistryError, match="source"):
            self.registry_load(tmp_path, "    source: plugin\n")

    def test_aliases_list(self, tmp_path):
        """A list of aliases registers each alias whole"""
        registry = self.registry_load(tmp_path, "    aliases: [wx, forecast]\n")

        assert registry.names_list() == ["forecast", "weather", "wx"]
        assert registry.get("forecast").alias_of == "weather"
