"""Tests for catalog/domain/errors.py."""

from uuid import uuid4

import pytest

from catalog.domain.errors import (
    AppError,
    ConflictError,
    NotFoundError,
    StorageUnavailableError,
)


@pytest.mark.parametrize("cls", [NotFoundError, ConflictError, StorageUnavailableError])
def test_errors_share_app_error_base(cls):
    assert issubclass(cls, AppError)


def test_not_found_carries_message_and_key():
    key = uuid4()
    err = NotFoundError(f"Model not found using ID {key}", key=key)
    assert str(err) == f"Model not found using ID {key}"
    assert err.key == key


def test_key_defaults_to_none():
    assert ConflictError("Name already used by another product").key is None


def test_message_and_key_survive_raise():
    key = uuid4()
    with pytest.raises(NotFoundError) as exc_info:
        raise NotFoundError(f"Product not found using ID {key}", key=key)
    assert exc_info.value.message == f"Product not found using ID {key}"
    assert exc_info.value.key == key


def test_conflict_is_not_a_not_found():
    assert not isinstance(ConflictError("x", key="x"), NotFoundError)
