"""OAuth entity persistence.

Credential, authorization code, token and scope stores over a document store.
"""

from oauthstore.auth.auth_codes import AuthCodeStore
from oauthstore.auth.credentials import CredentialStore
from oauthstore.auth.manager import OAuthPersistence
from oauthstore.auth.models import AccessToken, AuthCode, ClientCredentials, Scope
from oauthstore.auth.scopes import ScopeStore
from oauthstore.auth.tokens import TokenStore

__all__ = [
    "AccessToken",
    "AuthCode",
    "AuthCodeStore",
    "ClientCredentials",
    "CredentialStore",
    "OAuthPersistence",
    "Scope",
    "ScopeStore",
    "TokenStore",
]
