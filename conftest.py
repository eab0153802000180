"""Shared pytest fixtures."""

import random

import pytest

from powersum_solver.common.field import PrimeField


@pytest.fixture
def field7():
    return PrimeField(7)


@pytest.fixture
def field97():
    return PrimeField(97)


@pytest.fixture
def rng():
    return random.Random(1234)
