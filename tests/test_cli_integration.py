import json
import os
import subprocess
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
CASES_DIR = ROOT / "tests" / "cases"


def _run_cli(args):
    env = os.environ.copy()
    pythonpath = env.get("PYTHONPATH", "")
    env["PYTHONPATH"] = str(ROOT / "src") + (os.pathsep + pythonpath if pythonpath else "")
    result = subprocess.run(
        [sys.executable, "-m", "cli", *args],
        cwd=ROOT,
        env=env,
        check=False,
        capture_output=True,
        text=True,
    )
    return result


def test_cli_clean_file():
    result = _run_cli(["check", str(CASES_DIR / "greet.js")])
    assert result.returncode == 0, result.stderr
    assert result.stdout == ""


def test_cli_reports_errors():
    result = _run_cli(["check", str(CASES_DIR / "tdz.js")])
    assert result.returncode == 1
    assert "tdz.js:1:13: 'total' is used before declaration (TDZ)" in result.stdout
    assert result.stdout.startswith("ERROR ")


def test_cli_warnings_only_fail_in_strict_mode():
    path = str(CASES_DIR / "unused.js")

    relaxed = _run_cli(["check", path])
    assert relaxed.returncode == 0, relaxed.stderr
    assert "'answer' is declared but never used" in relaxed.stdout

    strict = _run_cli(["check", path, "--strict"])
    assert strict.returncode == 1


def test_cli_severity_filter():
    result = _run_cli(["check", str(CASES_DIR / "unused.js"), "--severity", "error"])
    assert result.returncode == 0
    assert result.stdout == ""


def test_cli_json_output():
    result = _run_cli(["check", str(CASES_DIR / "unused.js"), "--json"])
    payload = json.loads(result.stdout)

    assert len(payload) == 1
    diagnostics = payload[0]["diagnostics"]
    assert [d["ruleId"] for d in diagnostics] == ["unused-declaration", "unused-declaration"]
    assert diagnostics[0]["fix"]["kind"] == "remove"
    assert diagnostics[0]["line"] == 1


def test_cli_module_and_globals():
    result = _run_cli(["check", str(CASES_DIR / "module_import.js"), "--module"])
    assert result.returncode == 0, result.stdout + result.stderr

    script = _run_cli(["check", str(CASES_DIR / "typo.js"), "--global", "consol"])
    assert script.returncode == 0, script.stdout


def test_cli_missing_file():
    result = _run_cli(["check", str(CASES_DIR / "does_not_exist.js")])
    assert result.returncode == 1
    assert "Input file not found" in result.stderr


def test_cli_without_command_prints_help():
    result = _run_cli([])
    assert result.returncode == 1
    assert "usage" in result.stdout
