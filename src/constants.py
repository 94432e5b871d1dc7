"""Application-wide constants.

This module centralizes all magic numbers and literal values so that the
webhook, the Messenger sender and the Direqt client share a single source
of truth.
"""

# =============================================================================
# Facebook Messenger
# =============================================================================

# Send API endpoint (messages are POSTed here with ?access_token=...)
DEFAULT_FACEBOOK_API_ROOT = "https://graph.facebook.com/v2.6/me/messages"

# Placeholder page access token; real deployments must override it
DEFAULT_PAGE_ACCESS_TOKEN = "<invalid>"

# Placeholder webhook verify token; change it for production webhooks
DEFAULT_VERIFY_TOKEN = "<provide-your-own-secure-token>"

# hub.mode value sent by Facebook when subscribing a webhook
WEBHOOK_SUBSCRIBE_MODE = "subscribe"

# Only webhook bodies with this "object" value carry page messaging events
PAGE_OBJECT = "page"

# Acknowledgement body for accepted event deliveries
EVENT_RECEIVED = "EVENT_RECEIVED"

# Echo reply template
ECHO_TEMPLATE = 'You said: "{text}"'

# =============================================================================
# Direqt
# =============================================================================

# Playground API key, acceptable for use in testing
DIREQT_PLAYGROUND_API_KEY = "5rp26o1WB5IBQ6gVTg"

DEFAULT_DIREQT_API_ROOT = "https://api.direqt.io"

DIREQT_FETCH_PATH = "/fetch"

# Content format requested from Direqt (Facebook Messenger)
DIREQT_FORMAT = "FBM"

# Targeting is sent as a JSON-encoded string, not an object
DIREQT_DEFAULT_TARGETING = '{"language":"en"}'

# Direqt statuses treated as a successful fetch
DIREQT_SUCCESS_STATUS_CODES = frozenset({200, 204})

# Moments pre-configured in the Direqt playground account
MOMENT_ID_PREFIX = "fbm-"
EXAMPLE_MOMENTS = frozenset({"text", "rich-card", "media"})

# =============================================================================
# HTTP Timeout Configuration
# =============================================================================

# Timeout for Facebook Send API calls (seconds)
FACEBOOK_API_TIMEOUT_SECONDS = 10.0

# Timeout for Direqt fetch calls (seconds)
DIREQT_API_TIMEOUT_SECONDS = 10.0

# Maximum response body length kept in error logs (chars)
LOGGED_RESPONSE_BODY_CHARS = 500

# =============================================================================
# Server
# =============================================================================

DEFAULT_PORT = 1337

APP_VERSION = "0.1.0"
