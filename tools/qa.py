#!/usr/bin/env python3
"""sfmanager quality gate.

Runs, in order: source decoding, byte-compilation, the pyproject/package
version match and the unittest suite. Any check can be skipped by name.
"""

from __future__ import annotations

import argparse
import compileall
import re
import subprocess
import sys
import tomllib
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
PACKAGE = ROOT / "sfmanager"


def _sources() -> list[Path]:
    found = [*PACKAGE.rglob("*.py"), *(ROOT / "tests").glob("*.py"), *(ROOT / "tools").glob("*.py")]
    found += [ROOT / name for name in ("pyproject.toml", "DESIGN.md") if (ROOT / name).exists()]
    return sorted(found)


def check_decoding() -> list[str]:
    problems = []
    for path in _sources():
        try:
            path.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            problems.append(f"{path.relative_to(ROOT)} is not UTF-8: {exc}")
    return problems


def check_compile() -> list[str]:
    ok = compileall.compile_dir(PACKAGE, quiet=1) and compileall.compile_dir(ROOT / "tools", quiet=1)
    return [] if ok else ["compileall reported syntax errors"]


def check_version() -> list[str]:
    declared = tomllib.loads((ROOT / "pyproject.toml").read_text(encoding="utf-8"))["project"]["version"]
    match = re.search(r"^__version__ = ['\"]([^'\"]+)['\"]",
                      (PACKAGE / "__init__.py").read_text(encoding="utf-8"), re.MULTILINE)
    runtime = match.group(1) if match else None
    if declared != runtime:
        return [f"pyproject.toml says {declared}, sfmanager.__version__ says {runtime}"]
    return []


def check_tests() -> list[str]:
    cmd = [sys.executable, "-m", "unittest", "discover", "-s", "tests", "-t", "."]
    code = subprocess.run(cmd, cwd=ROOT, check=False).returncode
    return [] if code == 0 else [f"unittest exited with {code}"]


CHECKS = {
    "decoding": check_decoding,
    "compile": check_compile,
    "version": check_version,
    "tests": check_tests,
}


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Run sfmanager quality checks.")
    parser.add_argument("--skip", action="append", default=[], choices=sorted(CHECKS),
                        help="skip a check (repeatable)")
    args = parser.parse_args(argv)

    failed = False
    for name, check in CHECKS.items():
        if name in args.skip:
            print(f"[SKIP] {name}")
            continue
        problems = check()
        print(f"[{'FAIL' if problems else 'OK'}] {name}")
        for problem in problems:
            print(f"  - {problem}")
        failed = failed or bool(problems)
    return 1 if failed else 0


if __name__ == "__main__":
    raise SystemExit(main())
