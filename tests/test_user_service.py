import uuid

import pytest
from sqlalchemy.exc import OperationalError

from user_portal.core.security import verify_password
from user_portal.models.schemas import UserCreate, UserUpdate
from user_portal.models.user import UserRole
from user_portal.services import auth_service, user_service
from user_portal.services.results import ServiceErrorCode


def _create(db, email="luis@example.com", role=UserRole.SUPERVISOR, password="pw-123"):
    result = user_service.create_user(db, UserCreate(email=email, password=password, role=role))
    assert result.ok
    return result.value


def test_create_user_hashes_password(db):
    user = _create(db)
    assert user.password_hash != "pw-123"
    assert verify_password("pw-123", user.password_hash)


def test_get_user_by_id_and_email(db):
    user = _create(db)
    assert user_service.get_user_by_id(db, str(user.id)).value.email == "luis@example.com"
    assert user_service.get_user_by_id(db, user.id).ok
    assert user_service.get_user_by_email(db, "luis@example.com").value.id == user.id


def test_lookups_report_not_found(db):
    for result in (
        user_service.get_user_by_id(db, uuid.uuid4()),
        user_service.get_user_by_id(db, "123"),
        user_service.get_user_by_email(db, "nobody@example.com"),
        user_service.update_person(db, uuid.uuid4(), UserUpdate(first_name="x")),
        user_service.delete_user(db, uuid.uuid4()),
    ):
        assert not result.ok
        assert result.error.code == ServiceErrorCode.NOT_FOUND


def test_update_person_ignores_explicit_null_for_required_fields(db):
    user = _create(db)
    result = user_service.update_person(db, user.id, UserUpdate(role=None, last_name="Ruiz"))
    assert result.ok
    assert result.value.role == UserRole.SUPERVISOR
    assert result.value.last_name == "Ruiz"


def test_delete_user_returns_deleted_id(db):
    user = _create(db)
    result = user_service.delete_user(db, user.id)
    assert result.ok
    assert result.value == user.id
    assert not user_service.get_user_by_id(db, user.id).ok


def test_get_users_by_role_filters(db):
    _create(db, email="a@example.com", role=UserRole.HR)
    _create(db, email="b@example.com", role=UserRole.EMPLOYEE)
    _create(db, email="c@example.com", role=UserRole.HR)

    result = user_service.get_users_by_role(db, UserRole.HR)
    assert result.ok
    assert sorted(u.email for u in result.value) == ["a@example.com", "c@example.com"]
    assert user_service.get_users_by_role(db, UserRole.MANAGER).value == []


def test_database_errors_become_internal_error(db, monkeypatch):
    def fail(*args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("database is locked"))

    rolled_back = []
    monkeypatch.setattr(db, "scalars", fail)
    monkeypatch.setattr(db, "rollback", lambda: rolled_back.append(True))

    result = user_service.get_users_by_role(db, UserRole.HR)
    assert result.error.code == ServiceErrorCode.INTERNAL_ERROR
    assert "database is locked" in result.error.message
    assert rolled_back


@pytest.mark.parametrize("email, password", [(None, "pw"), ("a@example.com", ""), (None, None)])
def test_authenticate_validates_before_lookup(db, monkeypatch, email, password):
    monkeypatch.setattr(
        user_service, "get_user_by_email", lambda *a: pytest.fail("lookup should not run")
    )
    result = auth_service.authenticate_user(db, email, password)
    assert result.error.code == ServiceErrorCode.VALIDATION_ERROR


def test_authenticate_hides_which_field_was_wrong(db):
    _create(db)
    unknown = auth_service.authenticate_user(db, "who@example.com", "pw-123")
    wrong = auth_service.authenticate_user(db, "luis@example.com", "bad")

    assert unknown.error == wrong.error
    assert wrong.error.code == ServiceErrorCode.INVALID_CREDENTIALS
    assert wrong.error.message == "Invalid credentials"


def test_authenticate_success(db):
    user = _create(db)
    result = auth_service.authenticate_user(db, "luis@example.com", "pw-123")
    assert result.ok
    assert result.value.id == user.id
