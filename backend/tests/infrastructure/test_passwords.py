"""Password Hasher — bcrypt hashing and verification.

Tests cover:
    - verify accepts the original password and rejects others
    - Hashes are salted (same input, different output)
    - A malformed stored hash verifies as False instead of raising
"""

from task_manager.infrastructure.passwords import BcryptPasswordHasher


def test_hash_then_verify():
    hasher = BcryptPasswordHasher(rounds=4)
    hashed = hasher.hash("secret")
    assert hashed != "secret"
    assert hasher.verify("secret", hashed)
    assert not hasher.verify("Secret", hashed)


def test_hashes_are_salted():
    hasher = BcryptPasswordHasher(rounds=4)
    assert hasher.hash("secret") != hasher.hash("secret")


def test_malformed_hash_is_not_a_match():
    assert not BcryptPasswordHasher(rounds=4).verify("secret", "not-a-bcrypt-hash")


def test_long_passwords_are_accepted():
    hasher = BcryptPasswordHasher(rounds=4)
    long_password = "p" * 100
    assert hasher.verify(long_password, hasher.hash(long_password))
