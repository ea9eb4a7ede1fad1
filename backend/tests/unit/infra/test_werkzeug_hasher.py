from __future__ import annotations

from tokengate.infra.security import WerkzeugCredentialHasher


def test_hash_never_contains_plaintext(hasher):
    digest = hasher.hash("s3cret-value")
    assert "s3cret-value" not in digest
    assert digest.startswith("pbkdf2:sha256")


def test_hash_is_salted(hasher):
    assert hasher.hash("same") != hasher.hash("same")


def test_verify_accepts_right_and_rejects_wrong_secret(hasher):
    digest = hasher.hash("right")
    assert hasher.verify("right", digest) is True
    assert hasher.verify("wrong", digest) is False


def test_verify_rejects_empty_hash():
    assert WerkzeugCredentialHasher().verify("anything", "") is False
