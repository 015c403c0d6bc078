"""Pydantic models for OAuth entity storage.

These models define the structure for persistent storage of OAuth entities
including clients, authorization codes, access tokens and scopes. Attribute
names are snake_case; aliases are the stored field names.
"""

import time
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field

from oauthstore.core.constants import (
    ACTIVE_STATUS,
    AUTH_CODE_RESPONSE_TYPE,
    BEARER_TOKEN_TYPE,
    SCOPE_SEPARATOR,
)


def split_scope(scope: str | None) -> list[str]:
    """Split a space-delimited scope string, dropping blanks and duplicates."""
    names: list[str] = []
    for name in (scope or "").split(SCOPE_SEPARATOR):
        if name and name not in names:
            names.append(name)
    return names


class StoredEntity(BaseModel):
    """Base class for every persisted OAuth entity."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    # Attribute stored under the store's primary key
    id_field: ClassVar[str] = "id"
    # Attributes stored as lists/maps but exposed as flat strings
    flatten_fields: ClassVar[tuple[str, ...]] = ()


class ClientCredentials(StoredEntity):
    """OAuth client application stored in persistent storage."""

    id_field: ClassVar[str] = "client_id"

    client_id: str
    secret: str
    name: str = ""
    uri: str = ""
    description: str = Field(default="", alias="descr")
    type: int = 0
    status: int = ACTIVE_STATUS
    created: float = Field(default_factory=time.time)
    scope: str = ""
    application_details: dict[str, str] = Field(
        default_factory=dict,
        alias="applicationDetails",
    )

    @property
    def scope_names(self) -> set[str]:
        """Scope names the client is allowed to request."""
        return set(split_scope(self.scope))


class AuthCode(StoredEntity):
    """Authorization code stored in persistent storage."""

    id: str | None = None
    code: str
    client_id: str = Field(alias="clientId")
    redirect_uri: str = Field(alias="redirectUri")
    state: str | None = None
    scope: str = ""
    type: str = AUTH_CODE_RESPONSE_TYPE
    valid: bool = True
    user_id: str | None = Field(default=None, alias="userId")
    created: float = Field(default_factory=time.time)


class AccessToken(StoredEntity):
    """Access token and its paired refresh token stored in persistent storage."""

    flatten_fields: ClassVar[tuple[str, ...]] = ("details",)

    id: str | None = None
    token: str
    refresh_token: str | None = Field(default=None, alias="refreshToken")
    expires_in: int = Field(default=0, alias="expiresIn")
    refresh_expires_in: int | None = Field(default=None, alias="refreshExpiresIn")
    type: str = BEARER_TOKEN_TYPE
    scope: str = ""
    valid: bool = True
    client_id: str = Field(alias="clientId")
    code_id: str | None = Field(default=None, alias="codeId")
    user_id: str | None = Field(default=None, alias="userId")
    created: float = Field(default_factory=time.time)
    details: str | None = None

    @property
    def valid_until(self) -> float | None:
        """Epoch seconds when the access token expires (None = no expiry)."""
        if self.expires_in <= 0:
            return None
        return self.created + self.expires_in

    @property
    def refresh_valid_until(self) -> float | None:
        """Epoch seconds when the refresh token expires (None = no expiry)."""
        if not self.refresh_expires_in or self.refresh_expires_in <= 0:
            return None
        return self.created + self.refresh_expires_in

    def is_expired(self, now: float | None = None) -> bool:
        """Check the access token expiry; enforcement is left to the caller."""
        valid_until = self.valid_until
        if valid_until is None:
            return False
        return (now if now is not None else time.time()) >= valid_until


class Scope(StoredEntity):
    """Named scope definition stored in persistent storage."""

    id_field: ClassVar[str] = "name"

    name: str
    description: str = ""
    cc_expires_in: int | None = Field(default=None, alias="ccExpiresIn")
    pass_expires_in: int | None = Field(default=None, alias="passExpiresIn")
    refresh_expires_in: int | None = Field(default=None, alias="refreshExpiresIn")
