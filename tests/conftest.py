import random

import pytest

from pyvss.backends import BACKENDS, get_backend


def pytest_addoption(parser):
    parser.addoption("--threshold", action="store", default=3, type=int,
        help="sharing threshold %(default)s")
    parser.addoption("--num-shares", action="store", default=5, type=int,
        help="number of shares to deal %(default)s")
    parser.addoption("--seed", action="store", default=20170815, type=int,
        help="seed for the test randomness source %(default)s")


@pytest.fixture
def threshold(request):
    return request.config.getoption("--threshold")


@pytest.fixture
def num_shares(request):
    return request.config.getoption("--num-shares")


@pytest.fixture
def rng(request):
    return random.Random(request.config.getoption("--seed"))


@pytest.fixture(params=sorted(BACKENDS))
def backend(request):
    return get_backend(request.param)


@pytest.fixture
def secp256k1():
    return get_backend('secp256k1')
