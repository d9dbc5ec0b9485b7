#!/usr/bin/env python3
"""Functional smoke tests for basedirs (runs the CLI in subprocesses)."""

from __future__ import annotations

import argparse
import json
import os
import shutil
import subprocess
import sys
import tempfile
from pathlib import Path
from typing import Any

import yaml

ROOT = Path(__file__).resolve().parents[1]

PASSWD_FIXTURE = "root:x:0:0:root:/root:/bin/sh\nalice:x:1000:1000:Alice:/home/alice:/bin/sh\n"

EXPECTED_LISTING = {
    "posix": {
        "home": "/home/alice",
        "data": "/home/alice/.local/share",
        "config": "/home/alice/.config",
        "cache": "/home/alice/.cache",
        "state": "/home/alice/.local/state",
        "runtime": "/run/user/1000",
        "bin": "/home/alice/.local/bin",
    },
    "macos": {
        "home": "/home/alice",
        "data": "/home/alice/Library",
        "config": "/home/alice/Library/Preferences",
        "cache": "/home/alice/Library/Caches",
        "state": "/home/alice/Library/Preferences",
        "runtime": "/home/alice/Library/Caches/TemporaryItems",
        "bin": "/home/alice/Library/bin",
    },
}


def _run_cli(args: list[str], env: dict[str, str], *, allowed_codes: set[int] | None = None) -> subprocess.CompletedProcess:
    cmd = [sys.executable, "-m", "basedirs.cli"] + args
    proc = subprocess.run(cmd, capture_output=True, text=True, env=env, cwd=ROOT)
    if allowed_codes is None:
        allowed_codes = {0}
    if proc.returncode not in allowed_codes:
        raise RuntimeError(
            f"command failed ({proc.returncode}): {' '.join(args)}\nstdout: {proc.stdout}\nstderr: {proc.stderr}"
        )
    return proc


def _parse_listing(text: str) -> dict[str, Any]:
    data = yaml.safe_load(text) or {}
    return data.get("basedirs") or {}


def _assert(condition: bool, message: str) -> None:
    if not condition:
        raise AssertionError(message)


def main() -> int:
    parser = argparse.ArgumentParser(description="Run basedirs functional smoke tests.")
    parser.add_argument("--keep-temp", action="store_true", help="Keep temporary directory")
    parser.add_argument("--verbose", action="store_true", help="Print extra diagnostics")
    args = parser.parse_args()

    temp_dir = Path(tempfile.mkdtemp(prefix="basedirs-functional-"))
    cfg_path = temp_dir / "config.yaml"
    passwd_path = temp_dir / "passwd"
    log_path = temp_dir / "resolve.jsonl"
    passwd_path.write_text(PASSWD_FIXTURE, encoding="utf-8")
    cfg_path.write_text(yaml.safe_dump({"logging": {"path": str(log_path)}}), encoding="utf-8")

    env = os.environ.copy()
    env["BASEDIRS_CONFIG"] = str(cfg_path)
    env["PYTHONPATH"] = str(ROOT) + os.pathsep + env.get("PYTHONPATH", "")

    try:
        for platform, expected in EXPECTED_LISTING.items():
            proc = _run_cli(["show", "--clean-env", "--env", "HOME=/home/alice", "--platform", platform], env)
            listing = _parse_listing(proc.stdout)
            _assert(listing == expected, f"{platform} listing mismatch: {listing}")

        proc = _run_cli(["show", "--clean-env", "--platform", "posix", "--passwd", str(passwd_path), "--format", "json"], env)
        payload = json.loads(proc.stdout)
        _assert(payload["basedirs"]["home"] == "/home/alice", "passwd fallback should resolve home")

        proc = _run_cli(["show", "--clean-env", "--platform", "windows", "--format", "json", "--quiet"], env)
        payload = json.loads(proc.stdout)
        _assert(payload["basedirs"]["bin"] == "C:\\Windows\\system32", "windows bin should default to system32")
        _assert("home" in payload["missing"], "windows home should be unresolved")

        proc = _run_cli(["show", "--platform", "beos"], env, allowed_codes={1})
        _assert("unsupported platform" in proc.stderr, "unknown platform should be reported")

        _assert(len(log_path.read_text(encoding="utf-8").splitlines()) == 4, "each resolution should be logged")

        doctor = _run_cli(["doctor", "--clean-env", "--env", "HOME=/home/alice", "--platform", "posix", "--quiet"], env)
        _assert(doctor.returncode == 0, f"doctor failed: {doctor.stderr}")

        if args.verbose:
            sys.stdout.write("Functional tests passed.\n")
    finally:
        if args.keep_temp:
            sys.stdout.write(f"Temp files at {temp_dir}\n")
        else:
            shutil.rmtree(temp_dir, ignore_errors=True)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
