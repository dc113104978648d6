"""
QBox request signing compatible with the storage service's Go SDK.

This module provides HMAC-SHA1 token generation for raw data, upload
policies and management requests, plus verification of upload callbacks.
Tokens have the form::

    <access_key>:<urlsafe_b64(hmac_sha1)>[:<urlsafe_b64(payload)>]
"""

import base64
import enum
import hashlib
import hmac
import json
import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Dict, Mapping, Tuple, Union

from .body import rewound
from .constants import (
    AUTH_SCHEME_QBOX,
    CONTENT_TYPE_FORM,
    CONTENT_TYPE_JSON,
    DEFAULT_CONFIG,
    HEADER_AUTHORIZATION,
)
from .exceptions import BodyReadError, ConfigurationError
from .request import RequestView

logger = logging.getLogger(__name__)


class SignVersion(enum.Enum):
    """Request canonicalization scheme."""

    V1 = 1  # legacy: path, query and form body
    V2 = 2  # also binds method, host and content type


def _urlsafe_b64encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).decode('ascii')


def _head_v1(request: RequestView) -> str:
    head = request.path
    if request.query:
        head += '?' + request.query
    return head + '\n'


def _head_v2(request: RequestView) -> str:
    head = f"{request.method} {request.path}"
    if request.query:
        head += '?' + request.query

    head += f"\nHost: {request.host}"

    content_type = request.content_type
    if content_type:
        head += f"\nContent-Type: {content_type}"

    return head + '\n\n'


def _include_body_v1(request: RequestView) -> bool:
    return request.body is not None and request.content_type == CONTENT_TYPE_FORM


def _include_body_v2(request: RequestView) -> bool:
    return request.body is not None and request.content_type in (CONTENT_TYPE_FORM, CONTENT_TYPE_JSON)


_STRATEGIES: Dict[SignVersion, Tuple[Callable[[RequestView], str], Callable[[RequestView], bool]]] = {
    SignVersion.V1: (_head_v1, _include_body_v1),
    SignVersion.V2: (_head_v2, _include_body_v2),
}


def canonicalize(request: RequestView, version: SignVersion = SignVersion.V1) -> bytes:
    """
    Build the bytes that are signed for a request.

    The body is appended only for the content types the version signs.
    A stream body is left at the read position it had on entry.

    Args:
        request: Request to canonicalize
        version: Canonicalization scheme

    Returns:
        Canonical request bytes

    Raises:
        BodyReadError: If the body is needed but cannot be read and restored
    """
    build_head, include_body = _STRATEGIES[version]
    data = build_head(request).encode('utf-8')

    if not include_body(request):
        return data

    with rewound(request.body) as body:
        return data + body.read_all()


def canonical_v1(request: RequestView) -> bytes:
    return canonicalize(request, SignVersion.V1)


def canonical_v2(request: RequestView) -> bytes:
    return canonicalize(request, SignVersion.V2)


@dataclass(frozen=True)
class Credentials:
    """Access key and secret key pair. The secret is kept out of ``repr``."""

    access_key: str
    secret_key: bytes = field(repr=False)


class Authorization:
    """
    Signer bound to one pair of credentials.

    Instances hold no mutable state and may be shared between threads;
    every call builds its own HMAC object.
    """

    def __init__(self, access_key: str, secret_key: Union[str, bytes], **config):
        """
        Initialize signer.

        Args:
            access_key: Public identifier sent with every token
            secret_key: Secret used only as the HMAC key
            **config: Configuration options (constant_time_compare)

        Raises:
            ConfigurationError: If credentials or options are invalid
        """
        if not access_key:
            raise ConfigurationError("access_key cannot be empty")
        if not secret_key:
            raise ConfigurationError("secret_key cannot be empty")

        if isinstance(secret_key, str):
            secret_key = secret_key.encode('utf-8')

        self._credentials = Credentials(access_key, bytes(secret_key))

        # Merge default config with user overrides
        self._config = MappingProxyType({**DEFAULT_CONFIG, **config})

        self._validate_config(config)

    def _validate_config(self, overrides: Mapping[str, Any]):
        """Validate signer configuration."""
        unknown = sorted(set(overrides) - set(DEFAULT_CONFIG))
        if unknown:
            raise ConfigurationError(f"unknown configuration options: {', '.join(unknown)}")

        if not isinstance(self._config['constant_time_compare'], bool):
            raise ConfigurationError("constant_time_compare must be a bool")

    @property
    def access_key(self) -> str:
        return self._credentials.access_key

    @property
    def credentials(self) -> Credentials:
        return self._credentials

    @property
    def config(self) -> Mapping[str, Any]:
        return self._config

    def __repr__(self):
        return f"{type(self).__name__}(access_key={self.access_key!r})"

    def _digest(self, data: bytes) -> str:
        mac = hmac.new(self._credentials.secret_key, data, hashlib.sha1)
        return _urlsafe_b64encode(mac.digest())

    def sign(self, data: bytes) -> str:
        """
        Sign raw bytes.

        Args:
            data: Data to sign

        Returns:
            Token ``access_key:signature``
        """
        return f"{self.access_key}:{self._digest(data)}"

    def sign_with_data(self, payload: bytes) -> str:
        """
        Sign a payload and carry it in the token.

        The raw payload is signed, not its encoded form, so a receiver
        decodes the third segment and checks the signature against it.

        Args:
            payload: Data to sign and embed

        Returns:
            Token ``access_key:signature:encoded_payload``
        """
        return f"{self.access_key}:{self._digest(payload)}:{_urlsafe_b64encode(payload)}"

    def upload_token(self, policy: Dict[str, Any]) -> str:
        """
        Build an upload token from a put policy.

        The policy is serialized as compact JSON; its fields are not
        validated.
        """
        data = json.dumps(policy, separators=(',', ':')).encode('utf-8')
        return self.sign_with_data(data)

    def sign_request(self, request: RequestView, version: SignVersion = SignVersion.V1) -> str:
        """
        Generate a management token for a request.

        Args:
            request: Request to sign
            version: Canonicalization scheme (V1 for ``QBox``, V2 for ``Qiniu``)

        Returns:
            Token ``access_key:signature``

        Raises:
            BodyReadError: If the body is needed but cannot be read and restored
        """
        try:
            data = canonicalize(request, version)
        except BodyReadError as e:
            logger.warning("Cannot sign %s %s: %s", request.method, request.path, e)
            raise

        logger.debug("Signing %s %s with %s", request.method, request.path, version.name)
        return self.sign(data)

    def sign_request_v2(self, request: RequestView) -> str:
        """Generate a V2 management token for a request."""
        return self.sign_request(request, SignVersion.V2)

    def verify_callback(self, request: RequestView) -> bool:
        """
        Verify that an upload callback was signed with these credentials.

        A missing ``Authorization`` header or a token mismatch gives
        ``False``. Body failures are raised, never reported as ``False``.

        Args:
            request: Inbound callback request

        Returns:
            True if the header equals ``QBox <token>`` for the request

        Raises:
            BodyReadError: If the body is needed but cannot be read and restored
        """
        auth = request.header(HEADER_AUTHORIZATION)
        if not auth:
            logger.debug("Callback %s has no %s header", request.path, HEADER_AUTHORIZATION)
            return False

        expected = f"{AUTH_SCHEME_QBOX} {self.sign_request(request)}"

        if self._config['constant_time_compare']:
            valid = hmac.compare_digest(
                expected.encode('utf-8'),
                auth.encode('utf-8', 'surrogatepass')
            )
        else:
            valid = auth == expected

        logger.debug("Callback %s signature %s", request.path, "valid" if valid else "invalid")
        return valid
