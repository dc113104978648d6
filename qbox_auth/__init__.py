"""
QBox Auth Library

Request signing and callback verification for the cloud-storage API,
compatible with the service's Go SDK.

Example usage:
    from qbox_auth import Authorization, RequestView

    auth = Authorization("access-key", "secret-key")
    token = auth.upload_token({"scope": "bucket", "deadline": 1700000000})

    view = RequestView(method="POST", path="/callback", host="example.com")
    auth.verify_callback(view)
"""

from .signer import (
    Authorization,
    Credentials,
    SignVersion,
    canonicalize,
    canonical_v1,
    canonical_v2
)
from .request import RequestView
from .body import RewindableBody, rewound
from .transport import QBoxAuth, QiniuAuth
from .exceptions import (
    QBoxAuthError,
    BodyReadError,
    ConfigurationError
)
from .constants import (
    AUTH_SCHEME_QBOX,
    AUTH_SCHEME_QINIU,
    CONTENT_TYPE_FORM,
    CONTENT_TYPE_JSON,
    CONTENT_TYPE_OCTET,
    CONTENT_TYPE_MULTIPART,
    HEADER_AUTHORIZATION,
    DEFAULT_CONFIG
)

__version__ = "1.0.0"
__all__ = [
    "Authorization",
    "Credentials",
    "SignVersion",
    "canonicalize",
    "canonical_v1",
    "canonical_v2",
    "RequestView",
    "RewindableBody",
    "rewound",
    "QBoxAuth",
    "QiniuAuth",
    "QBoxAuthError",
    "BodyReadError",
    "ConfigurationError",
    "AUTH_SCHEME_QBOX",
    "AUTH_SCHEME_QINIU",
    "CONTENT_TYPE_FORM",
    "CONTENT_TYPE_JSON",
    "CONTENT_TYPE_OCTET",
    "CONTENT_TYPE_MULTIPART",
    "HEADER_AUTHORIZATION",
    "DEFAULT_CONFIG"
]
