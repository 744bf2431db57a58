"""Tests for password records and signed session cookies."""

import hashlib

import pytest

from portal.auth import (
    hash_password,
    read_session_id,
    sign_session_id,
    verify_password,
)


def test_hash_round_trip():
    record = hash_password("secret")
    assert verify_password("secret", record)


def test_wrong_password_rejected():
    record = hash_password("secret")
    assert not verify_password("Secret", record)
    assert not verify_password("", record)


def test_hash_is_salted():
    first = hash_password("same")
    second = hash_password("same")
    assert first != second
    assert verify_password("same", first)
    assert verify_password("same", second)


def test_record_format():
    key, salt = hash_password("secret").split(".")
    assert len(key) == 128
    assert len(salt) == 32
    int(key, 16)
    int(salt, 16)


def test_verifies_record_written_with_same_parameters():
    salt = "00112233445566778899aabbccddeeff"
    key = hashlib.scrypt(b"legacy", salt=salt.encode(), n=16384, r=8, p=1, dklen=64)
    assert verify_password("legacy", f"{key.hex()}.{salt}")


@pytest.mark.parametrize(
    "stored",
    [
        "",
        "no-delimiter",
        ".onlysalt",
        "abcd.",
        "zz-not-hex.00112233",
        "abcd.ef.01",
        "abcd.0011",  # key too short
    ],
)
def test_malformed_record_is_a_failed_verification(stored):
    assert verify_password("anything", stored) is False


def test_session_cookie_round_trip():
    assert read_session_id(sign_session_id("token-123")) == "token-123"


def test_tampered_session_cookie(monkeypatch):
    cookie = sign_session_id("token-123")
    header, _, signature = cookie.split(".")
    _, forged_payload, _ = sign_session_id("token-456").split(".")
    assert read_session_id(f"{header}.{forged_payload}.{signature}") is None
    assert read_session_id("garbage") is None

    monkeypatch.setattr("portal.config.settings.secret_key", "another-key")
    assert read_session_id(cookie) is None


def test_unencodable_password_is_a_failed_verification():
    record = hash_password("secret")
    assert verify_password("\ud800", record) is False
