import pytest

from secure_jwt.algorithms import (
    AES128GCM,
    AES256GCM,
    ChaCha20Poly1305Algorithm,
    EncryptedBlock,
    EncryptionAlgo,
    KeyDerivation,
    derive_key,
    derive_key_basic,
    derive_key_pbkdf2,
    fit_key,
    get_algorithm,
    random_bytes,
    supported_algorithms,
)
from secure_jwt.algorithms.base import EncryptionAlgorithm
from secure_jwt.errors import DecryptionError, EncryptionError, ValidationError

ALGORITHMS = [AES128GCM, AES256GCM, ChaCha20Poly1305Algorithm]


def _seal(algorithm: EncryptionAlgorithm, plaintext: str = '{"data":"hello"}', version: str = "1.0.0"):
    key = random_bytes(algorithm.get_key_length())
    iv = random_bytes(algorithm.get_iv_length())
    return key, algorithm.encrypt(plaintext, key, iv, version)


@pytest.mark.parametrize(
    "algorithm_cls,key_length,iv_length",
    [(AES128GCM, 16, 12), (AES256GCM, 32, 16), (ChaCha20Poly1305Algorithm, 32, 12)],
)
def test_key_and_iv_lengths(algorithm_cls, key_length: int, iv_length: int) -> None:
    algorithm = algorithm_cls()
    assert algorithm.get_key_length() == key_length
    assert algorithm.get_iv_length() == iv_length


@pytest.mark.parametrize("algorithm_cls", ALGORITHMS)
def test_encrypt_then_decrypt(algorithm_cls) -> None:
    algorithm = algorithm_cls()
    key, block = _seal(algorithm, "héllo wörld")

    assert len(block.iv) == algorithm.get_iv_length() * 2
    assert len(block.tag) == 32
    assert block.encrypted == block.encrypted.lower()
    assert algorithm.decrypt(block, key, "1.0.0") == "héllo wörld"


@pytest.mark.parametrize("algorithm_cls", ALGORITHMS)
def test_version_is_bound_as_aad(algorithm_cls) -> None:
    algorithm = algorithm_cls()
    key, block = _seal(algorithm, version="1.0.0")
    with pytest.raises(DecryptionError, match="Decryption failed"):
        algorithm.decrypt(block, key, "1.0.1")


@pytest.mark.parametrize("algorithm_cls", ALGORITHMS)
def test_wrong_key_and_tampering_fail_uniformly(algorithm_cls) -> None:
    algorithm = algorithm_cls()
    key, block = _seal(algorithm)
    other_key = random_bytes(algorithm.get_key_length())

    flipped_tag = ("0" if block.tag[0] != "0" else "1") + block.tag[1:]
    flipped_body = ("0" if block.encrypted[0] != "0" else "1") + block.encrypted[1:]

    failures = []
    for candidate_key, candidate in [
        (other_key, block),
        (key, EncryptedBlock(block.encrypted, block.iv, flipped_tag)),
        (key, EncryptedBlock(flipped_body, block.iv, block.tag)),
    ]:
        with pytest.raises(DecryptionError) as excinfo:
            algorithm.decrypt(candidate, candidate_key, "1.0.0")
        failures.append(excinfo.value.message)

    assert len(set(failures)) == 1


@pytest.mark.parametrize(
    "iv,tag,encrypted,expected",
    [
        ("zz" * 16, "a" * 32, "abcd", "Invalid IV format"),
        ("ab" * 8, "a" * 32, "abcd", "Invalid IV format"),
        ("ab" * 16, "a" * 31, "abcd", "Invalid authentication tag format"),
        ("ab" * 16, "g" * 32, "abcd", "Invalid authentication tag format"),
        ("ab" * 16, "a" * 32, "abc", "Invalid ciphertext format"),
    ],
)
def test_malformed_fields_raise_decryption_error(iv: str, tag: str, encrypted: str, expected: str) -> None:
    algorithm = AES256GCM()
    with pytest.raises(DecryptionError, match=expected):
        algorithm.decrypt(EncryptedBlock(encrypted, iv, tag), random_bytes(32), "1.0.0")


def test_empty_tag_is_an_encryption_error() -> None:
    class _Truncating:
        def encrypt(self, nonce: bytes, data: bytes, aad: bytes) -> bytes:
            return b""

    class BrokenCipher(AES256GCM):
        def _cipher(self, key: bytes):
            return _Truncating()

    algorithm = BrokenCipher()
    with pytest.raises(EncryptionError, match="authentication tag"):
        algorithm.encrypt("payload", random_bytes(32), random_bytes(16), "1.0.0")


def test_get_algorithm_accepts_names_and_enums() -> None:
    assert isinstance(get_algorithm("aes-128-gcm"), AES128GCM)
    assert isinstance(get_algorithm(EncryptionAlgo.AES_256_GCM), AES256GCM)
    assert isinstance(get_algorithm("chacha20-poly1305"), ChaCha20Poly1305Algorithm)
    assert supported_algorithms() == ["aes-128-gcm", "aes-256-gcm", "chacha20-poly1305"]


@pytest.mark.parametrize("name", ["des", "AES-256-GCM", "", "aes-192-gcm"])
def test_get_algorithm_rejects_unknown_names(name: str) -> None:
    with pytest.raises(EncryptionError):
        get_algorithm(name)


def test_random_bytes_length_and_uniqueness() -> None:
    assert len(random_bytes(12)) == 12
    assert random_bytes(16) != random_bytes(16)


def test_basic_derivation_is_salt_then_secret() -> None:
    material = derive_key_basic("password123")
    assert len(material) == 32 + len("password123")
    assert material.endswith(b"password123")
    assert derive_key_basic("password123") != material


def test_pbkdf2_derivation() -> None:
    first = derive_key_pbkdf2("password123")
    assert len(first) == 32
    assert derive_key_pbkdf2("password123") != first


def test_derive_key_dispatch() -> None:
    assert derive_key("password123", "basic").endswith(b"password123")
    assert len(derive_key("password123", KeyDerivation.PBKDF2)) == 32
    with pytest.raises(ValidationError):
        derive_key("password123", "scrypt")


def test_fit_key_truncates_and_rejects_short_material() -> None:
    material = bytes(range(40))
    assert fit_key(material, AES128GCM()) == material[:16]
    assert fit_key(material, AES256GCM()) == material[:32]
    with pytest.raises(EncryptionError):
        fit_key(b"short", AES256GCM())


@pytest.mark.parametrize("algorithm", ALGORITHMS)
def test_basic_key_is_the_salt_after_fitting(monkeypatch: pytest.MonkeyPatch, algorithm) -> None:
    salt = bytes(range(32))
    monkeypatch.setattr("secure_jwt.algorithms.factory.random_bytes", lambda length: salt[:length])
    instance = algorithm()

    first = fit_key(derive_key_basic("password123"), instance)
    second = fit_key(derive_key_basic("another-passphrase"), instance)

    assert first == second == salt[: instance.get_key_length()]
