"""Unit tests for the command-line entry point (wppg.cli).

Tests cover:
- build_parser: --cex optional value, --cexf default, --output
- main: exit codes for success, cancellation, errors, failed exports and Ctrl-C
- main: a blank --cex value falls back to the default export basename
"""

from __future__ import annotations

import os
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from wppg.cli import build_parser, main
from wppg.config import Settings
from wppg.errors import InputValidationError, UnsupportedFormatError, UserCancelledError
from wppg.pipeline import Pipeline, PipelineResult, Stage

pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------


class TestBuildParser:
    def test_new_without_flags(self):
        args = build_parser(Settings()).parse_args(["new"])
        assert args.command == "new"
        assert args.cex is None
        assert args.cexf == "yaml"
        assert args.output is None

    def test_cex_without_value(self):
        args = build_parser(Settings()).parse_args(["new", "--cex"])
        assert args.cex == "wppg"

    def test_cex_with_empty_value(self):
        args = build_parser(Settings()).parse_args(["new", "--cex="])
        assert args.cex == ""

    def test_cex_with_value(self):
        args = build_parser(Settings()).parse_args(
            ["new", "--cex=conf/site", "--cexf=yaml,json"]
        )
        assert args.cex == "conf/site"
        assert args.cexf == "yaml,json"

    def test_defaults_follow_settings(self):
        settings = Settings(export_formats="xml", export_basename="plan")
        args = build_parser(settings).parse_args(["new", "--cex"])
        assert args.cex == "plan"
        assert args.cexf == "xml"

    def test_output(self):
        args = build_parser(Settings()).parse_args(["new", "-o", "projects"])
        assert args.output == Path("projects")

    def test_command_required(self):
        with pytest.raises(SystemExit):
            build_parser(Settings()).parse_args([])

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as info:
            build_parser(Settings()).parse_args(["--version"])
        assert info.value.code == 0
        assert "wppg" in capsys.readouterr().out


# ---------------------------------------------------------------------------
# main
# ---------------------------------------------------------------------------


def _result(success: bool = True) -> PipelineResult:
    return PipelineResult(stage=Stage.DONE, options={}, success=success)


@pytest.fixture
def clean_env():
    with patch.dict(os.environ, {}, clear=True):
        yield


@pytest.mark.usefixtures("clean_env")
class TestMain:
    def test_success(self):
        with patch("wppg.cli.Pipeline") as pipeline_cls:
            pipeline_cls.return_value.run.return_value = _result()
            assert main(["new"]) == 0
        settings = pipeline_cls.call_args.args[0]
        assert isinstance(settings, Settings)
        assert pipeline_cls.call_args.kwargs == {"export_path": None, "export_formats": "yaml"}

    def test_export_arguments_forwarded(self):
        with patch("wppg.cli.Pipeline") as pipeline_cls:
            pipeline_cls.return_value.run.return_value = _result()
            main(["new", "--cex=out/plan", "--cexf=json"])
        assert pipeline_cls.call_args.kwargs == {
            "export_path": "out/plan",
            "export_formats": "json",
        }

    @pytest.mark.parametrize("flag", ["--cex=", "--cex=  "])
    def test_empty_cex_uses_default_basename(self, flag):
        with patch("wppg.cli.Pipeline") as pipeline_cls:
            pipeline_cls.return_value.run.return_value = _result()
            assert main(["new", flag]) == 0
        assert pipeline_cls.call_args.kwargs["export_path"] == "wppg"

    def test_empty_cex_exports_to_default_file(self):
        captured = {}

        def build(*args, **kwargs):
            pipeline = Pipeline(*args, **kwargs)
            captured["pipeline"] = pipeline
            run = MagicMock(return_value=_result())
            pipeline.run = run
            return pipeline

        with patch("wppg.cli.Pipeline", side_effect=build):
            assert main(["new", "--cex="]) == 0
        pipeline = captured["pipeline"]
        assert Path(f"{pipeline.export_path}.yaml") == Path("wppg.yaml")

    def test_output_overrides_settings(self, tmp_path: Path):
        with patch("wppg.cli.Pipeline") as pipeline_cls:
            pipeline_cls.return_value.run.return_value = _result()
            main(["new", "--output", str(tmp_path)])
        assert pipeline_cls.call_args.args[0].output_dir == tmp_path

    def test_cancelled(self):
        with patch("wppg.cli.Pipeline") as pipeline_cls:
            pipeline_cls.return_value.run.side_effect = UserCancelledError()
            assert main(["new"]) == 1

    def test_validation_error(self):
        with patch("wppg.cli.Pipeline") as pipeline_cls:
            pipeline_cls.return_value.run.side_effect = InputValidationError(
                "Port?", "Invalid port number!", 3
            )
            assert main(["new"]) == 1

    def test_unsupported_format_at_construction(self):
        with patch("wppg.cli.Pipeline") as pipeline_cls:
            pipeline_cls.side_effect = UnsupportedFormatError("toml", ["json", "xml"])
            assert main(["new", "--cex", "--cexf=toml"]) == 1

    def test_failed_export(self):
        with patch("wppg.cli.Pipeline") as pipeline_cls:
            pipeline_cls.return_value.run.return_value = _result(success=False)
            assert main(["new", "--cex"]) == 1

    def test_keyboard_interrupt(self):
        with patch("wppg.cli.Pipeline") as pipeline_cls:
            pipeline_cls.return_value.run.side_effect = KeyboardInterrupt
            assert main(["new"]) == 130

    def test_invalid_environment(self):
        with patch.dict(os.environ, {"WPPG_MAX_ATTEMPTS": "0"}):
            pipeline_cls = MagicMock()
            with patch("wppg.cli.Pipeline", pipeline_cls):
                assert main(["new"]) == 1
        pipeline_cls.assert_not_called()
