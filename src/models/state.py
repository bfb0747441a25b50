"""
Program state model and pipeline helper

Defines ProgramState dataclass for the functional pipeline pattern and
the pipeline() helper for composing transformation stages.
"""

import dataclasses
from functools import reduce
from pathlib import Path
from argparse import Namespace
from typing import Any, Optional, Type, TypeVar, List, Dict, Callable
from dataclasses import dataclass, field


PS = TypeVar("PS", bound="ProgramState")


@dataclass
class ProgramState:
    """
    Central state container for the CLI pipeline (state bus pattern).

    This dataclass carries all program state through the functional pipeline,
    with each stage adding new fields as processing progresses.

    Pipeline stages and their state additions:
        - Initial: inputdir, outputdir, verbosity, probesFile, registryFile,
                   scopedMacro, outputSubdir
        - env_check: probesSourceFile, registrySourceFile, reportOutputdir, envOK
        - registry_load: macroRegistry, flagRegistry
        - probes_parse: probes
        - options_build: completions
        - report_write: reportResult
        - results_report: (no additions, terminal stage)

    Attributes:
        inputdir: Directory containing the probes (and registry) files
        outputdir: Base output directory for the report
        verbosity: Logging verbosity level (1-3)
        probesFile: Probes filename (relative to inputdir)
        registryFile: Optional YAML registry filename (relative to inputdir)
        scopedMacro: Optional name of an open scoped macro for every probe
        outputSubdir: Subdirectory within outputdir for the report
        envOK: Environment validation passed
        probesSourceFile: Resolved path to the probes file
        registrySourceFile: Resolved path to the registry file, if any
        reportOutputdir: Final output directory (outputdir + outputSubdir)
        macroRegistry: Loaded MacroRegistry
        flagRegistry: Loaded FlagRegistry
        probes: List of (line, macro text, caret offset) tuples
        completions: List of ProbeCompletion results
        reportResult: Report results (output_file, probe_count, warning_count, status)
    """

    # CLI arguments
    inputdir: Optional[Path] = field(default=None)
    outputdir: Optional[Path] = field(default=None)
    verbosity: int = field(default=1)
    probesFile: str = field(default="")
    registryFile: Optional[str] = field(default=None)
    scopedMacro: Optional[str] = field(default=None)
    outputSubdir: str = field(default=".")

    # Pipeline state
    envOK: bool = field(default=False)
    probesSourceFile: Path = field(default=Path("/"))
    registrySourceFile: Optional[Path] = field(default=None)
    reportOutputdir: Path = field(default=Path("/"))
    macroRegistry: Optional[Any] = field(default=None)  # MacroRegistry at runtime
    flagRegistry: Optional[Any] = field(default=None)  # FlagRegistry at runtime
    probes: Optional[List[Any]] = field(default=None)
    completions: Optional[List[Any]] = field(default=None)  # List[ProbeCompletion]
    reportResult: Optional[Dict] = field(default=None)

    @classmethod
    def state_createFromNamespace(
        cls: Type["ProgramState"], options: Namespace, inputdir: Path, outputdir: Path
    ) -> "ProgramState":
        """
        Create ProgramState from argparse Namespace and directory paths.

        Args:
            options: Parsed CLI arguments (probesFile, registryFile, etc.)
            inputdir: Directory containing input files
            outputdir: Directory for report output

        Returns:
            ProgramState instance with all CLI options as attributes
        """
        options_dict = vars(options)

        # Only keep options that are ProgramState fields
        valid_fields = {f.name for f in dataclasses.fields(cls)}
        filtered_options = {k: v for k, v in options_dict.items() if k in valid_fields}

        merged_args = {**filtered_options, "inputdir": inputdir, "outputdir": outputdir}
        return cls(**merged_args)

    def copy(self: PS) -> PS:
        """
        Creates a shallow copy of the ProgramState instance.

        Returns:
            A new ProgramState instance.
        """
        return type(self)(**self.__dict__)


def pipeline(
    initial_state: ProgramState, *stages: Callable[[ProgramState], ProgramState]
) -> ProgramState:
    """
    Execute a functional pipeline of state transformations.

    Each stage is a function (ProgramState) -> ProgramState that receives
    the output of the previous stage and returns a new state.

    Example:
        final_state = pipeline(
            initial_state,
            env_check,
            registry_load,
            probes_parse,
            options_build,
            report_write,
            results_report
        )
    """
    return reduce(lambda state, stage: stage(state), stages, initial_state)
