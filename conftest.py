"""Configures pytest further."""
import pytest
from cryptography.hazmat.primitives.asymmetric import rsa

TARGET_SIZES = [1024, 2048, 3072, pytest.param(4096, marks=pytest.mark.slow)]
_generated = {}


def pytest_addoption(parser):
    parser.addoption("--skip-slow", action="store_true", default=False, help="skip slower tests")


def pytest_collection_modifyitems(config, items):
    if not config.getoption("--skip-slow"):
        return
    skip = pytest.mark.skip(reason="Slow test: needs no --skip-slow option")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip)


def private_key(size: int) -> rsa.RSAPrivateKey:
    """Generates each key size once per session."""
    if size not in _generated:
        _generated[size] = rsa.generate_private_key(public_exponent=65537, key_size=size)
    return _generated[size]


@pytest.fixture(scope="session", params=TARGET_SIZES)
def keyset(request) -> rsa.RSAPrivateKey:
    return private_key(request.param)


@pytest.fixture(scope="session")
def key1024() -> rsa.RSAPrivateKey:
    return private_key(1024)


@pytest.fixture(scope="session")
def key2048() -> rsa.RSAPrivateKey:
    return private_key(2048)
