from uma.proto import generate_keypair
import pytest


@pytest.fixture
def keys():
    """A fresh secp256k1 keypair for signing invoices"""
    return generate_keypair()
