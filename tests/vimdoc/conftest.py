"""Shared fixtures for vimdoc tests."""

import pytest

from vimdoc import VimdocASTBuilder

from vimdoc_test_utils import SAMPLE_HELP


@pytest.fixture
def sample_help():
    """Fixture providing a small but complete help file."""
    return SAMPLE_HELP


@pytest.fixture
def ast_builder():
    """Fixture providing a vimdoc AST builder instance."""
    return VimdocASTBuilder()
