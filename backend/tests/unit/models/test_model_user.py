"""Tests for the User model: password hashing and field normalization."""

from __future__ import annotations

import pytest
from vidshare.models.user import User

from tests.factories.user import UserFactory


class TestPasswordHashing:
    def test_hash_never_equals_plaintext(self, session):
        user = UserFactory(password="p1")
        assert user.password_hash
        assert user.password_hash != "p1"
        assert user.verify_password("p1") is True
        assert user.verify_password("p2") is False

    def test_same_password_produces_different_hashes(self, session):
        a = UserFactory(password="same-secret")
        b = UserFactory(password="same-secret")
        assert a.password_hash != b.password_hash
        assert a.verify_password("same-secret")
        assert b.verify_password("same-secret")

    def test_password_is_write_only(self):
        user = User()
        with pytest.raises(AttributeError):
            _ = user.password

    def test_empty_password_rejected(self):
        user = User()
        with pytest.raises(ValueError):
            user.password = ""


class TestNormalization:
    def test_username_and_email_are_lowercased(self, session):
        user = UserFactory(username="  AnaBanana ", email=" Ana@Example.COM ")
        assert user.username == "anabanana"
        assert user.email == "ana@example.com"

    def test_full_name_is_trimmed(self, session):
        user = UserFactory(full_name="  Ana Lopez  ")
        assert user.full_name == "Ana Lopez"

    @pytest.mark.parametrize("email", ["", "not-an-email"])
    def test_invalid_email_rejected(self, email):
        with pytest.raises(ValueError):
            User(email=email)

    def test_blank_username_rejected(self):
        with pytest.raises(ValueError):
            User(username="   ")

    def test_ids_are_uuid_hex(self, session):
        user = UserFactory()
        assert len(user.id) == 32
        int(user.id, 16)
