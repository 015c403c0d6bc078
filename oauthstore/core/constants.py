"""Application-wide constants for the OAuth persistence core.

Collection and field names match the stored document layout.
"""

# ========================================
# Collections
# ========================================

CLIENTS_COLLECTION = "clients"
AUTH_CODES_COLLECTION = "authCodes"
ACCESS_TOKENS_COLLECTION = "accessTokens"
SCOPES_COLLECTION = "scopes"

# ========================================
# Stored Field Names
# ========================================

ID_NAME = "_id"  # Store primary key
CLIENT_ID_NAME = "clientId"
AUTH_CODE_ID_NAME = "code"
ACCESS_TOKEN_ID_NAME = "token"
REFRESH_TOKEN_ID_NAME = "refreshToken"
REDIRECT_URI_NAME = "redirectUri"
VALID_NAME = "valid"
SCOPE_NAME = "scope"
DESCRIPTION_NAME = "descr"
STATUS_NAME = "status"

# ========================================
# Client Status
# ========================================

ACTIVE_STATUS = 1
INACTIVE_STATUS = 0

# ========================================
# Token Defaults
# ========================================

BEARER_TOKEN_TYPE = "Bearer"
AUTH_CODE_RESPONSE_TYPE = "code"
SCOPE_SEPARATOR = " "

# ========================================
# Storage Defaults
# ========================================

STORAGE_TIMEOUT_DEFAULT = 10.0  # Seconds per storage round trip
