"""Library-wide constants.

This module centralizes the Graph API endpoints, field lists and default
timeouts so the client, config and webhook layers share a single source of
truth.
"""

# =============================================================================
# Facebook Graph API
# =============================================================================

# Facebook Graph API version
FACEBOOK_GRAPH_API_VERSION = "v18.0"

# Base URL used when no graph_api_url is configured
FACEBOOK_GRAPH_API_URL = f"https://graph.facebook.com/{FACEBOOK_GRAPH_API_VERSION}"

# Send API path, relative to the Graph API base URL
SEND_API_PATH = "me/messages"

# Profile fields requested by the User Profile API
USER_PROFILE_FIELDS = (
    "first_name",
    "last_name",
    "profile_pic",
    "locale",
    "timezone",
    "gender",
)

# =============================================================================
# HTTP Timeout Configuration
# =============================================================================

# Timeout for Messenger Platform API calls (seconds)
MESSENGER_API_TIMEOUT_SECONDS = 10.0

# =============================================================================
# Encoding
# =============================================================================

# Multipart part carrying uploaded attachment bytes
UPLOAD_FILE_FIELD = "filedata"

# Separator substituted for "/" when deriving an upload file name from its
# content type ("image/png" -> "image.png")
UPLOAD_FILENAME_SEPARATOR = "."

# =============================================================================
# Webhook
# =============================================================================

# Only callbacks for this object type are dispatched
WEBHOOK_PAGE_OBJECT = "page"

# Header carrying the HMAC-SHA256 payload signature
WEBHOOK_SIGNATURE_HEADER = "X-Hub-Signature-256"

# Limit on response bodies copied into log records (chars)
LOG_RESPONSE_BODY_CHARS = 500

# Query parameters masked before request details are logged
REDACTED_QUERY_PARAMS = frozenset({"access_token"})
