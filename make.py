#!/usr/bin/env python3
"""Build script for cmdbuild itself."""

import sys

from cmdbuild import Build, Command

b = Build()


def lint() -> None:
    b.run(sys.executable, "-m", "ruff", "check", "src", "tests")
    b.force_run(sys.executable, "-m", "ruff", "format", "--check", "src", "tests")


def test() -> None:
    b.run(sys.executable, "-m", "pytest", "tests")


def dist() -> None:
    with b.step("clean"):
        b.once("clean", clean)
    b.run(sys.executable, "-m", "build")


def clean() -> None:
    b.sh_run("rm", "-rf", "dist", "build", "*.egg-info")


if __name__ == "__main__":
    b.register(
        [
            Command(name="lint", body=lint),
            Command(name="test", body=test),
            Command(name="clean", body=clean),
            Command(name="dist", body=dist),
        ]
    )
    b.main()
