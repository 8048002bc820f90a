"""Run every ``examples/ex_*/01_*.py`` script and compare stdout with its ``# =>`` comments."""

from __future__ import annotations

import os
import re
import subprocess
import sys
from pathlib import Path

import pytest

REPO_ROOT = Path(__file__).resolve().parents[2]
EXAMPLES_ROOT = REPO_ROOT / "examples"
SRC_ROOT = REPO_ROOT / "src"

_EXPECTED_OUTPUT = re.compile(r"^\s*print\(.*\)\s*# =>\s?(?P<expected>.*)$")


def _example_paths() -> list[Path]:
    return sorted(EXAMPLES_ROOT.glob("ex_*/01_*.py"))


def _expected_lines(path: Path) -> list[str]:
    lines: list[str] = []
    for line in path.read_text(encoding="utf-8").splitlines():
        match = _EXPECTED_OUTPUT.match(line)
        if match is not None:
            lines.append(match.group("expected").strip())
    return lines


def test_every_topic_has_an_example() -> None:
    topics = sorted(path for path in EXAMPLES_ROOT.glob("ex_*") if path.is_dir())

    assert topics
    for topic in topics:
        assert len(list(topic.glob("01_*.py"))) == 1, f"{topic} needs exactly one 01_*.py file"


@pytest.mark.parametrize(
    "path",
    _example_paths(),
    ids=lambda path: str(path.relative_to(REPO_ROOT)),
)
def test_example_stdout_matches_inline_expectations(path: Path) -> None:
    expected = _expected_lines(path)
    assert expected, f"{path} has no '# =>' expectations"

    env = os.environ.copy()
    env["PYTHONPATH"] = os.pathsep.join(filter(None, (str(SRC_ROOT), env.get("PYTHONPATH"))))

    completed = subprocess.run(  # noqa: S603
        [sys.executable, str(path)],
        cwd=path.parent,
        env=env,
        capture_output=True,
        text=True,
        check=False,
        timeout=30,
    )

    assert completed.returncode == 0, completed.stderr
    assert completed.stderr == ""
    assert completed.stdout.splitlines() == expected
