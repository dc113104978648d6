"""
``requests`` integration.

Attach a signer to a session and every outgoing request carries an
``Authorization`` header::

    session = requests.Session()
    session.auth = QBoxAuth(Authorization(access_key, secret_key))
"""

import requests

from .constants import AUTH_SCHEME_QBOX, AUTH_SCHEME_QINIU, HEADER_AUTHORIZATION
from .request import RequestView
from .signer import Authorization, SignVersion


class QBoxAuth(requests.auth.AuthBase):
    """Sign requests with a V1 token under the ``QBox`` scheme."""

    scheme = AUTH_SCHEME_QBOX
    version = SignVersion.V1

    def __init__(self, authorization: Authorization):
        self.authorization = authorization

    def __call__(self, r: requests.PreparedRequest) -> requests.PreparedRequest:
        token = self.authorization.sign_request(RequestView.from_prepared(r), self.version)
        r.headers[HEADER_AUTHORIZATION] = f"{self.scheme} {token}"
        return r


class QiniuAuth(QBoxAuth):
    """Sign requests with a V2 token under the ``Qiniu`` scheme."""

    scheme = AUTH_SCHEME_QINIU
    version = SignVersion.V2
