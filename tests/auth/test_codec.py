"""
Unit tests for oauthstore/auth/codec.py

Tests entity/record conversion including:
- Identifier renaming to _id and omission when absent
- Stored field names (aliases)
- Flattening of list-shaped details
"""

import json

from oauthstore.auth.codec import decode, encode
from oauthstore.auth.models import AccessToken, AuthCode, ClientCredentials, Scope


class TestEncode:
    """Test encode function."""

    def test_client_id_becomes_primary_key(self, sample_client):
        """Test client_id is stored under _id and not duplicated."""
        record = encode(sample_client)

        assert record["_id"] == "abc"
        assert "client_id" not in record
        assert record["secret"] == "s3cret"
        assert record["descr"] == "test application"
        assert record["applicationDetails"] == {}

    def test_absent_identifier_is_omitted(self, sample_auth_code):
        """Test a missing id leaves no _id and no id key in the record."""
        record = encode(sample_auth_code)

        assert "_id" not in record
        assert "id" not in record
        assert record["code"] == "c1"
        assert record["clientId"] == "abc"
        assert record["redirectUri"] == "https://cb"
        assert record["valid"] is True

    def test_present_identifier_is_renamed(self, sample_auth_code):
        """Test a set id is stored under _id."""
        record = encode(sample_auth_code.model_copy(update={"id": "code-record-1"}))

        assert record["_id"] == "code-record-1"
        assert "id" not in record

    def test_scope_name_is_primary_key(self, sample_scope):
        """Test scopes are keyed by their name."""
        record = encode(sample_scope)

        assert record["_id"] == "basic"
        assert "name" not in record
        assert record["ccExpiresIn"] == 900
        assert record["refreshExpiresIn"] == 86400

    def test_access_token_field_names(self, sample_access_token):
        """Test token records use the stored camelCase names."""
        record = encode(sample_access_token)

        assert record["token"] == "at-123"
        assert record["refreshToken"] == "rt-456"
        assert record["clientId"] == "abc"
        assert record["expiresIn"] == 900
        assert record["codeId"] == "c1"


class TestDecode:
    """Test decode function."""

    def test_restores_identifier(self, sample_client):
        """Test encode followed by decode gives back the same client."""
        decoded = decode(ClientCredentials, encode(sample_client))

        assert decoded == sample_client

    def test_store_assigned_id(self):
        """Test an _id assigned by the store lands on the id attribute."""
        record = {
            "_id": "64b7f0c2",
            "code": "c9",
            "clientId": "abc",
            "redirectUri": "https://cb",
            "valid": True,
        }

        auth_code = decode(AuthCode, record)

        assert auth_code.id == "64b7f0c2"
        assert auth_code.code == "c9"
        assert auth_code.redirect_uri == "https://cb"

    def test_list_details_flattened_to_string(self):
        """Test list-valued details become a JSON string."""
        record = {
            "token": "at-1",
            "clientId": "abc",
            "details": ["device:tv", "ip:10.0.0.1"],
        }

        token = decode(AccessToken, record)

        assert isinstance(token.details, str)
        assert json.loads(token.details) == ["device:tv", "ip:10.0.0.1"]

    def test_map_details_flattened_to_string(self):
        """Test map-valued details become a JSON string."""
        record = {"token": "at-1", "clientId": "abc", "details": {"device": "tv"}}

        token = decode(AccessToken, record)

        assert json.loads(token.details) == {"device": "tv"}

    def test_string_details_untouched(self):
        """Test details that are already a string are kept as they are."""
        record = {"token": "at-1", "clientId": "abc", "details": "plain"}

        assert decode(AccessToken, record).details == "plain"

    def test_unknown_fields_ignored(self):
        """Test extra stored columns do not break decoding."""
        record = {"_id": "basic", "description": "Basic", "legacyFlag": 1}

        scope = decode(Scope, record)

        assert scope.name == "basic"
        assert scope.description == "Basic"
