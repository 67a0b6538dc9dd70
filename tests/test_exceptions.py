import pytest

from consignment.core.exceptions import (
    ConflictError,
    NotFoundError,
    ValidationError,
    handle_database_error,
)


def test_not_found_message_and_status():
    err = NotFoundError("Vendor", "abc")
    assert err.message == "Vendor with id abc not found"
    assert err.status_code == 404
    assert err.code == "NOT_FOUND"
    assert NotFoundError("Expense").message == "Expense not found"


def test_conflict_and_validation_status():
    assert ConflictError("x").status_code == 409
    assert ValidationError("x").status_code == 422


@pytest.mark.parametrize(
    "message",
    [
        'insert or update on table "item" violates foreign key constraint "item_vendor_id_fkey"',
        "FOREIGN KEY constraint failed",
    ],
)
def test_foreign_key_violations_become_conflicts(message):
    with pytest.raises(ConflictError, match="delete vendor - referenced by other records"):
        handle_database_error(RuntimeError(message), "delete vendor")


@pytest.mark.parametrize(
    "message",
    [
        'duplicate key value violates unique constraint "users_email_key"',
        "UNIQUE constraint failed: users.email",
    ],
)
def test_duplicates_become_conflicts(message):
    with pytest.raises(ConflictError, match="Duplicate value error in create user"):
        handle_database_error(RuntimeError(message), "create user")


def test_unrecognised_errors_propagate_unchanged():
    original = RuntimeError("connection reset by peer")
    with pytest.raises(RuntimeError) as info:
        handle_database_error(original, "anything")
    assert info.value is original
