import pytest

from secure_jwt import KeyRotationManager, TokenConfig, ValidationError


def test_old_tokens_survive_one_rotation() -> None:
    manager = KeyRotationManager("initial-secret-1", "1.0.0")
    first = manager.sign({"userId": 123})

    manager.rotate("rotated-secret-2", "2.0.0")
    second = manager.sign({"userId": 123, "gen": 2})

    assert manager.current_version == "2.0.0"
    assert manager.previous_version == "1.0.0"
    assert manager.verify(first) is True
    assert manager.verify(second) is True
    assert manager.decode(first) == {"userId": 123}
    assert manager.decode(second) == {"userId": 123, "gen": 2}


def test_tokens_expire_after_two_rotations() -> None:
    manager = KeyRotationManager("initial-secret-1", "1.0.0")
    first = manager.sign({"userId": 1})
    manager.rotate("rotated-secret-2", "2.0.0")
    manager.rotate("rotated-secret-3", "3.0.0")

    assert manager.previous_version == "2.0.0"
    assert manager.verify(first) is False
    with pytest.raises(ValidationError, match="every available key"):
        manager.decode(first)


def test_without_rotation_there_is_no_previous_handler() -> None:
    manager = KeyRotationManager("initial-secret-1")
    assert manager.previous_version is None
    assert manager.verify("A" * 12) is False
    with pytest.raises(ValidationError):
        manager.decode("A" * 12)


def test_from_config_keeps_handler_options() -> None:
    config = TokenConfig(secret="initial-secret-1", expire_in="5m", algorithm="aes-128-gcm", version="1.2.0")
    manager = KeyRotationManager.from_config(config)
    manager.rotate("rotated-secret-2", "1.3.0")

    token = manager.sign("payload")
    assert manager.decode(token) == "payload"
    assert manager.current_version == "1.3.0"
