"""Pytest configuration for the pegengine test suite.

Hypothesis profiles:
- engine: default, 200 examples per property
- engine-ci: selected when CI=true; derandomized with 50 examples

HYPOTHESIS_PROFILE overrides the selection.

Tests marked @pytest.mark.fuzz re-parse thousands of generated inputs and
are skipped unless pytest is run with --run-fuzz.
"""

import os

import pytest
from hypothesis import settings

settings.register_profile("engine", max_examples=200)
settings.register_profile("engine-ci", max_examples=50, derandomize=True, print_blob=True)

settings.load_profile(
    os.environ.get("HYPOTHESIS_PROFILE")
    or ("engine-ci" if os.environ.get("CI") == "true" else "engine")
)


def pytest_addoption(parser: pytest.Parser) -> None:
    parser.addoption(
        "--run-fuzz",
        action="store_true",
        default=False,
        help="run the long error-stack fuzz properties",
    )


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers", "fuzz: long error-stack properties, enabled with --run-fuzz"
    )


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    if config.getoption("--run-fuzz"):
        return
    skip_fuzz = pytest.mark.skip(reason="error-stack fuzz property; pass --run-fuzz")
    for item in items:
        if "fuzz" in item.keywords:
            item.add_marker(skip_fuzz)
