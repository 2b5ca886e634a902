"""
Shared test fixtures for the valtree test suite.
"""

import pytest

from helpers import ExplodingRule, SlowUppercaseRule
from valtree.compiler import Compiler
from valtree.rules import default_catalog


@pytest.fixture
def slow_uppercase():
    return SlowUppercaseRule()


@pytest.fixture
def catalog(slow_uppercase):
    """Default catalog plus the test rules."""
    return default_catalog().extend(
        {
            "slowUppercase": slow_uppercase,
            "exploding": ExplodingRule(),
        }
    )


@pytest.fixture
def compiler(catalog):
    return Compiler(catalog)
