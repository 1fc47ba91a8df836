"""Application tests for registration via domain.process()."""

import pytest
from protean import current_domain
from protean.exceptions import ValidationError

from identity.security import verify_password
from identity.user.registration import RegisterUser, ensure_admin
from identity.user.user import User
from shared.errors import ConflictError


def _register(**overrides):
    fields = {
        "name": "Asha",
        "business_name": "Patel Traders",
        "gstin": "24ABCDE1234F1Z5",
        "email": "asha@example.com",
        "password": "secret123",
        "phone_number": "9876543210",
        "address": "Relief Road, Ahmedabad",
    }
    fields.update(overrides)
    return current_domain.process(RegisterUser(**fields), asynchronous=False)


class TestRegisterUser:
    def test_registers_user_with_hashed_password(self):
        user_id = _register()

        stored = current_domain.repository_for(User).get(user_id)
        assert stored.email == "asha@example.com"
        assert stored.password_hash != "secret123"
        assert verify_password("secret123", stored.password_hash)
        assert stored.role == "user"

    def test_duplicate_email_conflicts_case_insensitively(self):
        _register()

        with pytest.raises(ConflictError) as exc:
            _register(email="ASHA@example.com")
        assert exc.value.messages == {"email": ["Email already registered"]}

    def test_short_password_rejected(self):
        with pytest.raises(ValidationError):
            _register(password="123")

    def test_missing_required_field_rejected(self):
        with pytest.raises(ValidationError) as exc:
            _register(phone_number=None)
        assert "phone_number" in exc.value.messages


class TestEnsureAdmin:
    def test_creates_admin_once(self):
        first = ensure_admin("root@example.com", "adminpass")
        second = ensure_admin("root@example.com", "adminpass")

        assert first.id == second.id
        assert first.is_admin
