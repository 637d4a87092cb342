"""
Tests for the User document model and the error taxonomy.
"""

from bson import ObjectId

from clinic.core.exceptions import (
    INVALID_CREDENTIALS_MESSAGE,
    ErrorKind,
    NotFoundError,
    UserError,
)
from clinic.models.user import Address, AddressType, Contact, User, UserRole


class TestUserDocument:
    """Tests for User.to_document / from_document."""

    def test_to_document_never_contains_plaintext_secrets(self):
        user = User(
            username="doc1",
            password="longenough1",
            password_hash="$2b$04$hash",
            remember="plaintext-token",
            remember_hash="hmac",
            role=UserRole.PHYSICIAN,
        )

        doc = user.to_document()

        assert "password" not in doc
        assert "remember" not in doc
        assert doc["password_hash"] == "$2b$04$hash"
        assert doc["remember_hash"] == "hmac"

    def test_to_document_excludes_id_and_stores_role_as_string(self):
        user = User(_id=str(ObjectId()), username="doc1", role=UserRole.STAFF)

        doc = user.to_document()

        assert "_id" not in doc
        assert "id" not in doc
        assert doc["role"] == "staff"

    def test_contact_and_addresses_are_carried_through(self):
        user = User(
            username="doc1",
            contact=Contact(email="doc1@clinic.org", mobile_phone="555-0100"),
            addresses=[Address(address_type=AddressType.BILLING, city="Pune", pincode=411001)],
        )

        doc = user.to_document()

        assert doc["contact"] == {"email": "doc1@clinic.org", "mobile_phone": "555-0100"}
        assert doc["addresses"][0]["address_type"] == "billing_address"
        assert doc["addresses"][0]["pincode"] == 411001

    def test_from_document_converts_object_id(self):
        oid = ObjectId()

        user = User.from_document({"_id": oid, "username": "doc1", "role": "admin"})

        assert user.id == str(oid)
        assert user.role == UserRole.ADMIN
        assert user.password == ""


class TestUserError:
    """Tests for the error taxonomy."""

    def test_credential_errors_share_public_message(self):
        unknown = UserError(ErrorKind.UNKNOWN_USERNAME)
        wrong = UserError(ErrorKind.INCORRECT_PASSWORD)

        assert unknown.public_message == wrong.public_message == INVALID_CREDENTIALS_MESSAGE
        assert unknown.is_credential_error and wrong.is_credential_error
        assert str(unknown) != str(wrong)

    def test_private_errors_hide_detail(self):
        error = UserError(ErrorKind.REMEMBER_TOO_SHORT)

        assert error.is_public is False
        assert "32 bytes" not in error.public_message
        assert "32 bytes" in str(error)

    def test_not_found_error_kind(self):
        error = NotFoundError()

        assert isinstance(error, UserError)
        assert error.kind == ErrorKind.NOT_FOUND
        assert error.is_public is True
