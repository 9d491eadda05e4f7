from unittest.mock import AsyncMock

import pytest

from app.api.utils.exceptions import EmailAlreadyInUseException
from app.api.utils.passwords import verify_password
from app.api.v1.models.user import UserRole
from app.api.v1.schemas.registration import RegistrationRequest
from app.api.v1.services.registration import RegistrationService, validate_email, validate_password
from tests.factories import make_user

VALID = {"email": "new@example.com", "password": "Password123", "terms_accepted": True}


def test_validate_email():
    assert validate_email("user@example.com")
    assert not validate_email("user@example")
    assert not validate_email("user example.com")


def test_validate_password_reports_each_rule():
    assert validate_password("Password123") == {"min_length": True, "has_uppercase": True, "has_number": True}
    assert validate_password("short") == {"min_length": False, "has_uppercase": False, "has_number": False}
    assert validate_password("alllowercase1")["has_uppercase"] is False


async def test_creates_inactive_customer(db_session):
    user = await RegistrationService.create_user_account(RegistrationRequest(**VALID), db_session)

    assert user.role == UserRole.CUSTOMER
    assert user.activated is False
    assert user.hash != VALID["password"]
    assert verify_password(VALID["password"], user.hash)


async def test_duplicate_email_is_rejected_in_locale(db_session):
    await RegistrationService.create_user_account(RegistrationRequest(**VALID), db_session)

    with pytest.raises(EmailAlreadyInUseException) as exc_info:
        await RegistrationService.create_user_account(RegistrationRequest(**VALID), db_session, locale="pl")

    assert exc_info.value.status_code == 409
    assert exc_info.value.message == "Użytkownik z tym adresem e-mail już istnieje"


async def test_seed_admin_creates_then_promotes(db_session):
    admin, created = await RegistrationService.create_admin_account("admin@example.com", "Password123", db_session)
    assert created is True
    assert admin.role == UserRole.ADMIN
    assert admin.activated is True

    customer = await RegistrationService.create_user_account(
        RegistrationRequest(email="staff@example.com", password="Password123", terms_accepted=True),
        db_session,
    )
    promoted, created = await RegistrationService.create_admin_account("staff@example.com", "ignored", db_session)
    assert created is False
    assert promoted.id == customer.id
    assert promoted.role == UserRole.ADMIN


class TestRegistrationRoute:
    def test_registers_customer(self, client, monkeypatch):
        user = make_user(email=VALID["email"], activated=False)
        monkeypatch.setattr(RegistrationService, "create_user_account", AsyncMock(return_value=user))

        response = client.post("/api/v1/registration", json=VALID)

        assert response.status_code == 201
        assert response.json()["data"] == {"id": str(user.id), "email": VALID["email"], "role": "customer"}

    @pytest.mark.parametrize(
        "overrides, field",
        [
            ({"email": "not-an-email"}, "email"),
            ({"password": "short"}, "password"),
            ({"password": "nouppercase1"}, "password"),
            ({"terms_accepted": False}, "terms_accepted"),
        ],
    )
    def test_invalid_payload_is_400(self, client, overrides, field):
        response = client.post("/api/v1/registration", json={**VALID, **overrides})

        assert response.status_code == 400
        body = response.json()
        assert body["detail"] == "VALIDATION_ERROR"
        assert any(error.startswith(field) for error in body["errors"])

    def test_duplicate_email_is_409(self, client, monkeypatch):
        monkeypatch.setattr(
            RegistrationService,
            "create_user_account",
            AsyncMock(side_effect=EmailAlreadyInUseException("User with this email already exists")),
        )

        response = client.post("/api/v1/registration", json=VALID)

        assert response.status_code == 409
        assert response.json()["detail"] == "EMAIL_IN_USE"
