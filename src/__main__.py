#!/usr/bin/env python3
"""
macrocomplete - Context-aware completion for macro template text

Runs the completion engine over a file of probes and writes an HTML report
showing what an editor would offer at each caret position.

As an aside, this codebase leverages the ChRIS "plugin" concept/pattern as
general purpose python app development framework.

Probe files:
    One probe per line: the text between the macro delimiters, with the
    caret marked by "|" (configurable via MACROCOMPLETE_CARET_MARKER).
    Blank lines and lines starting with "#" are skipped.

        roll::1d|20
        !?|
        getvar my|var
        /i|

Usage:
    macrocomplete inputdir/ outputdir/ --probesFile probes.txt

Examples:
    # Built-in macros only
    macrocomplete . output/ --probesFile probes.txt

    # With user macros and an open scoped block
    macrocomplete . output/ --probesFile probes.txt --registryFile macros.yaml --scopedMacro if

    # Verbose output with per-probe parse trace
    macrocomplete . output/ --probesFile probes.txt -vv
"""

import sys
from pathlib import Path
from argparse import ArgumentParser, Namespace, ArgumentDefaultsHelpFormatter

from chris_plugin import chris_plugin
from .config import appsettings
from .lib import (
    CompletionProvider,
    FlagRegistry,
    MacroOption,
    MacroRegistry,
    RegistryError,
    ReportWriter,
    __version__,
    LOG,
    state_connectToLogger,
)
from .models import ProgramState, ProbeCompletion, pipeline


DISPLAY_TITLE = r"""
  _ __ ___   __ _  ___ _ __ ___   ___ ___  _ __ ___  _ __
 | '_ ` _ \ / _` |/ __| '__/ _ \ / __/ _ \| '_ ` _ \| '_ \
 | | | | | | (_| | (__| | | (_) | (_| (_) | | | | | | |_) |
 |_| |_| |_|\__,_|\___|_|  \___/ \___\___/|_| |_| |_| .__/
                                                    |_|
  Context-aware macro completion
"""

# Define CLI arguments
parser = ArgumentParser(
    description="macrocomplete - Context-aware completion for macro template text",
    formatter_class=ArgumentDefaultsHelpFormatter,
)

parser.add_argument(
    "--probesFile", required=True, type=str, help="Probes file (relative to inputdir)"
)

parser.add_argument(
    "--registryFile",
    default=None,
    type=str,
    help="YAML file with additional macro definitions (relative to inputdir)",
)

parser.add_argument(
    "--scopedMacro",
    default=None,
    type=str,
    help="Treat every probe as typed inside this open scoped macro",
)

parser.add_argument(
    "--outputSubdir",
    default=".",
    type=str,
    help="Subdirectory within outputdir for the report",
)

parser.add_argument(
    "-v",
    "--verbosity",
    action="count",
    default=1,
    help="Increase output verbosity (can be repeated: -v, -vv, -vvv)",
)

parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")


def env_check(inputstate: ProgramState) -> ProgramState:
    """
    Validate environment and resolve all file paths.

    Returns:
        ProgramState with added fields:
            - probesSourceFile: Resolved path to the probes file
            - registrySourceFile: Resolved path to the registry file, if given
            - reportOutputdir: Created output directory path
            - envOK: True if environment is valid

    Exits:
        1 if the probes or registry file is not found
    """

    state = inputstate.copy()

    if state.verbosity >= 2:
        LOG(DISPLAY_TITLE, level=2)

    LOG("Checking environment...", level=2)

    probes_file = state.inputdir / state.probesFile
    if not probes_file.exists():
        print(f"Error: Probes file not found: {probes_file}", file=sys.stderr)
        state.envOK = False
        sys.exit(1)
    state.probesSourceFile = probes_file
    LOG(f"Probes file: {probes_file}", level=2)

    if state.registryFile:
        registry_file = state.inputdir / state.registryFile
        if not registry_file.exists():
            print(f"Error: Registry file not found: {registry_file}", file=sys.stderr)
            state.envOK = False
            sys.exit(1)
        state.registrySourceFile = registry_file
        LOG(f"Registry file: {registry_file}", level=2)

    state.reportOutputdir = state.outputdir / state.outputSubdir
    state.reportOutputdir.mkdir(parents=True, exist_ok=True)
    LOG(f"Output directory: {state.reportOutputdir}", level=2)

    state.envOK = True
    return state


def registry_load(inputstate: ProgramState) -> ProgramState:
    """
    Build the macro and flag registries.

    Returns:
        ProgramState with added fields:
            - macroRegistry: Built-in macros plus any loaded from registryFile
            - flagRegistry: Built-in flag table

    Exits:
        1 if the registry file is invalid
    """

    state = inputstate.copy()

    LOG("Loading registries...", level=1)
    state.macroRegistry = MacroRegistry()
    state.flagRegistry = FlagRegistry()

    if state.registrySourceFile is not None:
        try:
            state.macroRegistry.registry_loadYAML(state.registrySourceFile)
        except RegistryError as e:
            print(f"Registry error: {e}", file=sys.stderr)
            sys.exit(1)

    LOG(f"{len(state.macroRegistry)} macros, {len(state.flagRegistry.all())} flags", level=2)
    return state


def probes_parse(inputstate: ProgramState) -> ProgramState:
    """
    Read the probes file into (line, text, caret offset) tuples.

    Returns:
        ProgramState with added field:
            - probes: List of (line, macro text, caret offset)

    Exits:
        1 if the file cannot be read
    """

    state = inputstate.copy()

    LOG("Reading probes...", level=1)
    try:
        source = state.probesSourceFile.read_text(encoding="utf-8")
    except OSError as e:
        print(f"Error reading probes file: {e}", file=sys.stderr)
        sys.exit(1)

    state.probes = []
    for line in source.splitlines():
        if not line.strip() or line.lstrip().startswith("#"):
            continue
        text, offset = appsettings.probe_split(line)
        state.probes.append((line, text, offset))

    LOG(f"Read {len(state.probes)} probes from {state.probesSourceFile.name}", level=2)
    return state


def options_build(inputstate: ProgramState) -> ProgramState:
    """
    Build the completion options for every probe.

    Returns:
        ProgramState with added field:
            - completions: List[ProbeCompletion]

    Exits:
        1 in strict mode when any probe raises an arity warning
    """

    state = inputstate.copy()

    LOG("Building completions...", level=1)
    provider = CompletionProvider(state.macroRegistry, state.flagRegistry)

    state.completions = []
    for line, text, offset in state.probes or []:
        context = provider.context_get(text, offset, state.scopedMacro)
        options = provider.options_forContext(context)
        top_macro = next((option for option in options if isinstance(option, MacroOption)), None)
        warning = top_macro.warning_get() if top_macro is not None else None
        if warning is not None:
            LOG(f"Warning for {line!r}: {warning}", level=1)
        state.completions.append(ProbeCompletion(line=line, context=context, options=options, warning=warning))

    if appsettings.strict_mode and any(completion.warning for completion in state.completions):
        print("Error: arity warnings in strict mode", file=sys.stderr)
        sys.exit(1)
    return state


def report_write(inputstate: ProgramState) -> ProgramState:
    """
    Write the HTML completion report.

    Returns:
        ProgramState with added field:
            - reportResult: Dict with status, output_file, probe_count, warning_count

    Exits:
        1 if writing fails
    """

    state = inputstate.copy()

    LOG("Writing report...", level=1)
    try:
        writer = ReportWriter(state.completions or [], str(state.reportOutputdir))
        state.reportResult = writer.write()
    except OSError as e:
        print(f"Report error: {e}", file=sys.stderr)
        sys.exit(1)
    return state


def results_report(inputstate: ProgramState) -> ProgramState:
    """
    Display report results to the user.

    Exits:
        1 if reportResult is None
    """
    state: ProgramState = inputstate.copy()
    if not state.reportResult:
        print("Error: Report generation failed", file=sys.stderr)
        sys.exit(1)

    if state.verbosity >= 1:
        LOG("\n✓ Report written!", level=1)
        LOG(f"  Output:   {state.reportResult['output_file']}", level=1)
        LOG(f"  Probes:   {state.reportResult['probe_count']}", level=1)
        LOG(f"  Warnings: {state.reportResult['warning_count']}", level=1)
    return state


@chris_plugin(
    parser=parser,
    title="macrocomplete - Context-aware macro completion",
    category="Utility",
    min_memory_limit="100Mi",
    min_cpu_limit="500m",
)
def main(options: Namespace, inputdir: Path, outputdir: Path):
    """
    Main entry point - build completion previews for a probes file.

    Orchestrates the pipeline:
        1. env_check: Validate paths and environment
        2. registry_load: Build macro/flag registries
        3. probes_parse: Read probe lines and caret offsets
        4. options_build: Parse each probe and build its options
        5. report_write: Write the HTML report
        6. results_report: Display results to user
    """

    state: ProgramState = ProgramState.state_createFromNamespace(
        options=options, inputdir=inputdir, outputdir=outputdir
    )

    state_connectToLogger(state)

    pipeline(state, env_check, registry_load, probes_parse, options_build, report_write, results_report)


if __name__ == "__main__":
    main()  # type: ignore  # @chris_plugin decorator transforms signature
