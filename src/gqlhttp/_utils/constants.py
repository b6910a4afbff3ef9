# Headers
HEADER_CONTENT_TYPE = "Content-Type"
HEADER_ACCEPT = "Accept"
HEADER_CONNECTION = "Connection"

# Content types
CONTENT_TYPE_JSON = "application/json; charset=utf-8"
ACCEPT_JSON = "application/json; charset=utf-8"

# Multipart field names
FIELD_QUERY = "query"
FIELD_VARIABLES = "variables"
FIELD_OPERATIONS = "operations"
FIELD_MAP = "map"

# Multipart request spec path prefix for file placeholders
FILES_VARIABLE_PATH = "variables.files"

# Header values masked in debug logs
SENSITIVE_HEADERS = frozenset(
    {"authorization", "cookie", "proxy-authorization", "x-api-key"}
)

# Environment
ENV_DISABLE_SSL_VERIFY = "GQLHTTP_DISABLE_SSL_VERIFY"

LOGGER_NAME = "gqlhttp"
