"""Shared fixtures for the AKS test suite."""

import matplotlib
matplotlib.use("Agg")

import pytest

from primality_test import AKSPrimalityTest


@pytest.fixture
def tester():
    return AKSPrimalityTest()
