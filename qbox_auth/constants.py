"""
Constants for the QBox auth library.
Compatible with the storage service's request-signing conventions.
"""

# Content types that decide whether a request body is signed
CONTENT_TYPE_FORM = "application/x-www-form-urlencoded"
CONTENT_TYPE_JSON = "application/json"

# Public convenience constants for callers; these types never include the body
CONTENT_TYPE_OCTET = "application/octet-stream"
CONTENT_TYPE_MULTIPART = "multipart/form-data"

# HTTP Headers
HEADER_AUTHORIZATION = "Authorization"
HEADER_CONTENT_TYPE = "Content-Type"
HEADER_HOST = "Host"

# Authorization header schemes
AUTH_SCHEME_QBOX = "QBox"    # V1 management and callback tokens
AUTH_SCHEME_QINIU = "Qiniu"  # V2 management tokens

# Default configuration values
DEFAULT_CONFIG = {
    'constant_time_compare': True,  # compare tokens with hmac.compare_digest
}
