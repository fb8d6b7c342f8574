import pytest

from app.errors import ValidationError
from app.utils.auth import PasswordHasher


@pytest.fixture
def hasher():
    return PasswordHasher(rounds=4)


def test_password_hashing_roundtrip(hasher):
    raw = "s3cr3tPa55!"
    hashed = hasher.hash_password(raw)
    assert hashed != raw
    assert hasher.verify_password(raw, hashed)
    assert not hasher.verify_password("wrong-password", hashed)

    # salted: a different hash every call
    assert hashed != hasher.hash_password(raw)


def test_cost_factor_is_encoded_in_hash():
    assert "$10$" in PasswordHasher().hash_password("secret1")


@pytest.mark.parametrize("password", ["", "12345", "a" * 73, "ñ" * 37])
def test_rejects_unhashable_lengths(hasher, password):
    with pytest.raises(ValidationError):
        hasher.hash_password(password)


def test_verify_against_garbage_hash(hasher):
    assert hasher.verify_password("secret1", "not-a-bcrypt-hash") is False
