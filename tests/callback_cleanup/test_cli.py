import re
import sys
import types
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

import callback_cleanup.cli as cli

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;]*[A-Za-z]")


def _strip_ansi(output: str) -> str:
    return ANSI_ESCAPE_RE.sub("", output)


MODULE_SOURCE = '''
def make_counter():
    count = [0]

    def counter():
        count[0] += 1
        return count[0]

    return counter


counter = make_counter()


def plain():
    return None


answer = 42
'''


@pytest.fixture
def scratch_module(monkeypatch: pytest.MonkeyPatch) -> types.ModuleType:
    module = types.ModuleType("cc_scratch_module")
    exec(MODULE_SOURCE, module.__dict__)
    monkeypatch.setitem(sys.modules, "cc_scratch_module", module)
    return module


def test_inspect_reports_module_level_closure_as_shareable(
    scratch_module: types.ModuleType,
) -> None:
    runner = CliRunner()
    result = runner.invoke(cli.app, ["inspect", "cc_scratch_module:counter"])

    assert result.exit_code == 0
    assert "cc_scratch_module:counter: shareable, construct() would wrap" in result.output


def test_inspect_reports_shareable_function(scratch_module: types.ModuleType) -> None:
    runner = CliRunner()
    result = runner.invoke(cli.app, ["inspect", "cc_scratch_module:plain"])

    assert result.exit_code == 0
    assert "shareable, construct() would wrap" in result.output


def test_inspect_resolves_dotted_attributes() -> None:
    runner = CliRunner()
    result = runner.invoke(cli.app, ["inspect", "builtins:str.upper"])

    assert result.exit_code == 0
    assert "shareable" in result.output


def test_inspect_rejects_non_callables(scratch_module: types.ModuleType) -> None:
    runner = CliRunner()
    result = runner.invoke(cli.app, ["inspect", "cc_scratch_module:answer"])

    assert result.exit_code == 1
    assert "expected a callable" in result.output


@pytest.mark.parametrize("target", ["no_colon_here", "missing_module_xyz:fn", "builtins:nope"])
def test_inspect_reports_unresolvable_targets(target: str) -> None:
    runner = CliRunner()
    result = runner.invoke(cli.app, ["inspect", target])

    assert result.exit_code == 1
    assert f"cannot resolve {target}" in result.output


def test_selfcheck_passes_for_both_strategies() -> None:
    runner = CliRunner()
    result = runner.invoke(cli.app, ["selfcheck"])

    assert result.exit_code == 0
    assert "attach: cleanup ran once after reclamation" in result.output
    assert "wrap: cleanup ran once after reclamation" in result.output


def test_selfcheck_fails_when_cleanup_does_not_run() -> None:
    runner = CliRunner()
    with patch("callback_cleanup.cli._run_sample", return_value=(0, 0)):
        result = runner.invoke(cli.app, ["selfcheck"])

    assert result.exit_code == 1
    assert "0 after drop" in result.output


def test_global_log_level_flag_sets_runtime_level() -> None:
    runner = CliRunner()
    with patch("callback_cleanup.cli.cc_log.set_level") as mock_set_level:
        result = runner.invoke(cli.app, ["--log-level", "DEBUG", "inspect", "builtins:len"])

    assert result.exit_code == 0
    mock_set_level.assert_called_once_with("debug")


def test_global_log_level_rejects_unknown_values() -> None:
    runner = CliRunner()
    result = runner.invoke(cli.app, ["--log-level", "loud", "selfcheck"], color=False)
    clean_output = _strip_ansi(result.output)

    assert result.exit_code != 0
    assert "--log-level" in clean_output
    assert "expected one of" in clean_output.lower()


def test_no_color_flag_disables_colorized_output() -> None:
    runner = CliRunner()
    with patch("callback_cleanup.cli.cc_log.set_no_color") as mock_set_no_color:
        result = runner.invoke(cli.app, ["--no-color", "inspect", "builtins:len"])

    assert result.exit_code == 0
    mock_set_no_color.assert_called_once_with(True)


def test_version_prints_package_version() -> None:
    runner = CliRunner()
    result = runner.invoke(cli.app, ["version"])

    assert result.exit_code == 0
    assert result.output.strip() == cli.__version__
