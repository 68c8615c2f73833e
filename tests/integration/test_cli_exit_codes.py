import os
from pathlib import Path


def test_no_logfile_is_unknown(run_cli):
    proc = run_cli([])
    assert proc.returncode == 3
    assert proc.stdout.strip() == "CheckLogfile UNKNOWN: No log file specified"


def test_bad_option_value_is_unknown(run_cli, tmp_path: Path):
    proc = run_cli(["-f", tmp_path / "a.log", "--entry-age", "ten"])
    assert proc.returncode == 3
    assert "invalid int value" in proc.stderr


def test_unknown_matcher_is_unknown(run_cli, tmp_path: Path):
    proc = run_cli(["-f", tmp_path / "a.log", "--matcher", "nonexistent"])
    assert proc.returncode == 3
    assert "Unknown matcher" in proc.stdout


def test_missing_logfile_is_critical(run_cli, tmp_path: Path, state_dir: Path):
    missing = tmp_path / "missing.log"
    proc = run_cli(["-f", missing, "-s", state_dir])
    assert proc.returncode == 2
    assert f"Could not open file {missing}" in proc.stdout
    assert "Traceback" not in proc.stderr


def test_warnings_only_is_warning(run_cli, tmp_path: Path, state_dir: Path, now: int):
    log = tmp_path / "app.log"
    log.write_text(f"{now} WARNING low disk\n")
    proc = run_cli(["-f", log, "-s", state_dir])
    assert proc.returncode == 1
    assert proc.stdout.strip() == "CheckLogfile WARNING: 1 warnings, 0 errors."


def test_errors_take_precedence(run_cli, tmp_path: Path, state_dir: Path, now: int):
    log = tmp_path / "app.log"
    log.write_text(f"{now} WARNING low disk\n{now} ERROR disk full\n")
    proc = run_cli(["-f", log, "-s", state_dir])
    assert proc.returncode == 2
    assert proc.stdout.strip() == "CheckLogfile CRITICAL: 1 warnings, 1 errors."


def test_stale_logfile_is_warning(run_cli, tmp_path: Path, state_dir: Path, now: int):
    log = tmp_path / "app.log"
    log.write_text("nothing to see\n")
    os.utime(log, (now - 4000, now - 4000))
    proc = run_cli(["-f", log, "-s", state_dir, "--logfile-age", "3600"])
    assert proc.returncode == 1
    assert f"logfile {log} has not been modified within 3600 seconds." in proc.stdout
