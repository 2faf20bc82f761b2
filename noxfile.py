"""Nox sessions orchestrating sinklog unit suites."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

import nox


PYTHON_VERSIONS = ["3.11", "3.12"]
PROJECT_ROOT = Path(__file__).parent

nox.options.sessions = [
    "tests_unit_logging",
    "tests_concurrency",
]


def _install_test_requirements(session: nox.Session) -> None:
    """Install the package and its testing toolchain inside the session environment."""

    session.install("-e", ".[test]")


def _normalize_pythonpath(existing: str | None) -> str:
    parts = [str(PROJECT_ROOT)]
    if existing:
        parts.append(existing)
    return ":".join(part for part in parts if part)


def _build_env(session: nox.Session) -> dict[str, str]:
    env = dict(session.env)
    env["PYTHONPATH"] = _normalize_pythonpath(env.get("PYTHONPATH"))
    return env


def _run_suite(session: nox.Session, suite: str, targets: Iterable[str], *pytest_args: str) -> None:
    _install_test_requirements(session)

    env = _build_env(session)

    args = [
        "coverage",
        "run",
        f"--context={suite}",
        "--source=sinklog",
        "-m",
        "pytest",
        *targets,
        *pytest_args,
        *session.posargs,
    ]

    session.log("Running %s suite: %s", suite, " ".join(args))
    session.run(*args, env=env)
    session.run("coverage", "report", "-m", env=env)


@nox.session(python=PYTHON_VERSIONS, reuse_venv=True, name="tests(unit_logging)")
def tests_unit_logging(session: nox.Session) -> None:
    """Execute the logger unit suites with coverage."""

    _run_suite(session, "logging", ["tests/unit/logging"], "-m", "not concurrency")


@nox.session(python=PYTHON_VERSIONS, reuse_venv=True, name="tests(concurrency)")
def tests_concurrency(session: nox.Session) -> None:
    """Execute the multi-threaded configuration atomicity suites."""

    _run_suite(session, "concurrency", ["tests/unit/logging"], "-m", "concurrency")
