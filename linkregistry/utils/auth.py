"""API key authentication for link registration

Writers authenticate with HTTP Basic credentials: the username must be the
configured API user and the password one of the configured API keys.

    Authorization: Basic base64(<api_user>:<api_key>)

Classes:
    Principal:
        Authenticated caller.
    TokenAuthenticator:
        Check Basic credentials from an API Gateway event.

Example:
    >>> authenticator = TokenAuthenticator(user='kit', tokens={'s3cret'})
    >>> event = {'headers': {'Authorization': 'Basic a2l0OnMzY3JldA=='}}
    >>> authenticator.authenticate(event)
    Principal(user='kit')
"""

import base64
import binascii
import hmac
from collections.abc import Iterable
from dataclasses import dataclass

from linkregistry.exceptions import AuthorizationError
from linkregistry.types import LambdaEvent


@dataclass(frozen=True)
class Principal:
    user: str


def basic_credentials(event: LambdaEvent) -> tuple[str, str] | None:
    """Extract (username, password) from the event's Basic Authorization header

    Header names are matched case-insensitively. Returns None if the header is
    missing, uses another scheme, or cannot be decoded.
    """
    headers = event.get('headers') or {}
    header = next((value for name, value in headers.items() if name.lower() == 'authorization'), None)
    if not header:
        return None

    scheme, _, encoded = header.partition(' ')
    if scheme.lower() != 'basic' or not encoded:
        return None

    try:
        decoded = base64.b64decode(encoded.strip(), validate=True).decode('utf-8')
    except (binascii.Error, UnicodeDecodeError):
        return None

    username, separator, password = decoded.partition(':')
    if not separator:
        return None
    return username, password


class TokenAuthenticator:
    """Authenticate and authorize link writers

    Attributes:
        user (str | None):
            The only user allowed to register links. Nobody is, if None.
        tokens (frozenset[str]):
            Accepted API keys.
    """

    def __init__(self, user: str | None, tokens: Iterable[str]):
        self.user = user
        self.tokens = frozenset(tokens)

    def authenticate(self, event: LambdaEvent) -> Principal | None:
        """Return the caller's Principal, or None if the credentials are missing or wrong."""
        credentials = basic_credentials(event)
        if credentials is None:
            return None

        username, password = credentials
        if not username.strip() or not password.strip() or self.user is None:
            return None

        user_matches = hmac.compare_digest(username.encode('utf-8'), self.user.encode('utf-8'))
        # Compare against every key so the timing does not reveal which one matched
        token_matches = False
        for token in self.tokens:
            token_matches |= hmac.compare_digest(password.encode('utf-8'), token.encode('utf-8'))

        if user_matches and token_matches:
            return Principal(user=username)
        return None

    def authorize(self, principal: Principal | None) -> Principal:
        """Return principal if it may register links

        Raises:
            AuthorizationError:
                If principal is None or is not the configured API user.
        """
        if principal is None or principal.user != self.user:
            raise AuthorizationError('forbidden')
        return principal

    def require(self, event: LambdaEvent) -> Principal:
        """Authenticate and authorize the caller of event in one step."""
        return self.authorize(self.authenticate(event))
