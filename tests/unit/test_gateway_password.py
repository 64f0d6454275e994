"""Unit tests for password hashing."""

from src.pf_gateway.auth.password import hash_password, verify_password


def test_hash_is_not_plain() -> None:
    hashed = hash_password("secret_pw")
    assert hashed != "secret_pw"
    assert hashed.startswith("$2")


def test_verify_correct_password() -> None:
    assert verify_password("secret_pw", hash_password("secret_pw")) is True


def test_verify_wrong_password() -> None:
    assert verify_password("wrong_pw", hash_password("secret_pw")) is False


def test_same_password_gets_different_salts() -> None:
    assert hash_password("secret_pw") != hash_password("secret_pw")


def test_non_bcrypt_hash_does_not_verify() -> None:
    legacy = "0f1e2d3c4b5a69788796a5b4c3d2e1f00f1e2d3c4b5a69788796a5b4c3d2e1f0"
    assert verify_password("secret_pw", legacy) is False
