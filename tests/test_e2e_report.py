"""
End-to-end report tests

Tests the full pipeline: probes file → registries → parse → options → HTML report
"""

import pytest
from pathlib import Path

from macrocomplete.__main__ import (
    env_check,
    registry_load,
    probes_parse,
    options_build,
    report_write,
    results_report,
)
from macrocomplete.lib.report import ReportWriter
from macrocomplete.models import ProgramState, ProbeCompletion, pipeline
from macrocomplete.lib.parser import context_parse


def state_make(inputdir: Path, outputdir: Path, **kwargs) -> ProgramState:
    """Initial state as the CLI would build it"""
    return ProgramState(inputdir=inputdir, outputdir=outputdir, verbosity=0, **kwargs)


class TestPipeline:
    """Test the complete CLI pipeline"""

    def test_report_written(self, tmp_path):
        """Probes produce one report section each"""
        inputdir = tmp_path / "in"
        inputdir.mkdir()
        (inputdir / "probes.txt").write_text(
            "# comment\n"
            "roll::1d|20\n"
            "\n"
            "!?|\n"
            "user::x|\n",
            encoding="utf-8",
        )

        state = pipeline(
            state_make(inputdir, tmp_path / "out", probesFile="probes.txt"),
            env_check, registry_load, probes_parse, options_build, report_write, results_report,
        )

        assert state.reportResult["status"] is True
        assert state.reportResult["probe_count"] == 3
        assert state.reportResult["warning_count"] == 1

        output_file = Path(state.reportResult["output_file"])
        assert output_file.exists()

        html = output_file.read_text(encoding="utf-8")
        assert 'id="probe-1"' in html
        assert 'id="probe-3"' in html
        assert "macro-ac-arg-hint" in html
        assert "macro-ac-warning" in html
        assert 'class="macro-source"' in html

    def test_probes_offsets(self, tmp_path):
        """Caret markers become offsets and are removed from the text"""
        (tmp_path / "probes.txt").write_text("getvar my|var\n", encoding="utf-8")

        state = pipeline(
            state_make(tmp_path, tmp_path / "out", probesFile="probes.txt"),
            env_check, probes_parse,
        )
        assert state.probes == [("getvar my|var", "getvar myvar", 9)]

    def test_user_registry_and_scope(self, tmp_path):
        """User macros are offered and scoped probes get the closing tag"""
        (tmp_path / "probes.txt").write_text("wea|\n", encoding="utf-8")
        (tmp_path / "macros.yaml").write_text(
            "macros:\n  - name: weather\n    maxArgs: 1\n", encoding="utf-8",
        )

        state = pipeline(
            state_make(
                tmp_path, tmp_path / "out",
                probesFile="probes.txt", registryFile="macros.yaml", scopedMacro="if",
            ),
            env_check, registry_load, probes_parse, options_build,
        )

        names = [option.name for option in state.completions[0].options]
        assert names == ["/if", "weather"]

    def test_missing_probes_file_exits(self, tmp_path):
        """A missing probes file stops the pipeline"""
        with pytest.raises(SystemExit):
            env_check(state_make(tmp_path, tmp_path / "out", probesFile="missing.txt"))

    def test_invalid_registry_exits(self, tmp_path):
        """An invalid registry file stops the pipeline"""
        (tmp_path / "probes.txt").write_text("x\n", encoding="utf-8")
        (tmp_path / "macros.yaml").write_text("macros: [unclosed", encoding="utf-8")

        with pytest.raises(SystemExit):
            pipeline(
                state_make(tmp_path, tmp_path / "out", probesFile="probes.txt", registryFile="macros.yaml"),
                env_check, registry_load,
            )


class TestReportWriter:
    """Test the report writer on its own"""

    def test_empty_report(self, tmp_path):
        """No probes still yields a valid document"""
        result = ReportWriter([], str(tmp_path)).write()

        assert result["probe_count"] == 0
        assert Path(result["output_file"]).read_text(encoding="utf-8").startswith("<!DOCTYPE html>")

    def test_probe_without_options(self, tmp_path):
        """Probes with no options render without a detail panel"""
        completion = ProbeCompletion(line="zzz|", context=context_parse("zzz", 3))
        result = ReportWriter([completion], str(tmp_path)).write()

        html = Path(result["output_file"]).read_text(encoding="utf-8")
        assert "zzz|" in html
        assert '<div class="probe-details"></div>' in html


class TestStrictMode:
    """Test the strict_mode setting while building completions"""

    def test_warnings_fail_in_strict_mode(self, tmp_path, monkeypatch):
        """Arity warnings stop the pipeline when strict mode is on"""
        from macrocomplete.config import appsettings

        monkeypatch.setattr(appsettings, "strict_mode", True)
        (tmp_path / "probes.txt").write_text("user::x|\n", encoding="utf-8")

        with pytest.raises(SystemExit):
            pipeline(
                state_make(tmp_path, tmp_path / "out", probesFile="probes.txt"),
                env_check, registry_load, probes_parse, options_build, report_write, results_report,
            )

    def test_clean_probes_pass_in_strict_mode(self, tmp_path, monkeypatch):
        """Probes without warnings pass strict mode"""
        from macrocomplete.config import appsettings

        monkeypatch.setattr(appsettings, "strict_mode", True)
        (tmp_path / "probes.txt").write_text("roll::1d|20\n", encoding="utf-8")

        state = pipeline(
            state_make(tmp_path, tmp_path / "out", probesFile="probes.txt"),
            env_check, registry_load, probes_parse, options_build, report_write, results_report,
        )
        assert state.reportResult["warning_count"] == 0
