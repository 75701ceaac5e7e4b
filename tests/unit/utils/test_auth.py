"""Unit tests for API key authentication.

Test coverage includes:

1. basic_credentials()
   - Ensures Basic credentials are decoded from case-insensitive header names.
   - Ensures missing, malformed or non-Basic headers yield None.

2. TokenAuthenticator
   - Ensures the configured user with any configured key is authenticated.
   - Ensures wrong user, wrong key, blank credentials or no configured user are rejected.
   - Ensures require() raises AuthorizationError for rejected callers.
"""

import base64

import pytest

from linkregistry.exceptions import AuthorizationError
from linkregistry.utils.auth import Principal, TokenAuthenticator, basic_credentials


def basic_event(username: str, password: str, header: str = 'Authorization') -> dict:
    token = base64.b64encode(f'{username}:{password}'.encode('utf-8')).decode('ascii')
    return {'headers': {header: f'Basic {token}'}}


@pytest.fixture
def authenticator():
    return TokenAuthenticator(user='kit', tokens=['s3cret', 'other-key'])


# -------------------------------
# 1. basic_credentials()
# -------------------------------


@pytest.mark.parametrize('header', ['Authorization', 'authorization', 'AUTHORIZATION'])
def test_basic_credentials(header):
    assert basic_credentials(basic_event('kit', 's3:cret', header)) == ('kit', 's3:cret')


@pytest.mark.parametrize(
    'event',
    [
        {},
        {'headers': None},
        {'headers': {}},
        {'headers': {'Authorization': ''}},
        {'headers': {'Authorization': 'Bearer abc'}},
        {'headers': {'Authorization': 'Basic'}},
        {'headers': {'Authorization': 'Basic !!!not-base64!!!'}},
        {'headers': {'Authorization': 'Basic ' + base64.b64encode(b'no-separator').decode()}},
        {'headers': {'Authorization': 'Basic ' + base64.b64encode(b'\xff\xfe:x').decode()}},
    ],
)
def test_basic_credentials_rejected(event):
    assert basic_credentials(event) is None


# -------------------------------
# 2. TokenAuthenticator
# -------------------------------


@pytest.mark.parametrize('password', ['s3cret', 'other-key'])
def test_authenticate(authenticator, password):
    assert authenticator.authenticate(basic_event('kit', password)) == Principal(user='kit')


@pytest.mark.parametrize(
    'username, password',
    [
        ('kit', 'wrong'),
        ('eve', 's3cret'),
        ('', 's3cret'),
        ('kit', ''),
        ('kit', '   '),
        ('kït', 's3cret'),
    ],
)
def test_authenticate_rejected(authenticator, username, password):
    assert authenticator.authenticate(basic_event(username, password)) is None


def test_authenticate_without_configured_user():
    authenticator = TokenAuthenticator(user=None, tokens=['s3cret'])
    assert authenticator.authenticate(basic_event('kit', 's3cret')) is None


def test_authenticate_without_configured_keys():
    authenticator = TokenAuthenticator(user='kit', tokens=[])
    assert authenticator.authenticate(basic_event('kit', 's3cret')) is None


def test_require(authenticator):
    assert authenticator.require(basic_event('kit', 's3cret')) == Principal(user='kit')


def test_require_rejected(authenticator):
    with pytest.raises(AuthorizationError, match='forbidden'):
        authenticator.require({'headers': {}})


def test_authorize_other_principal(authenticator):
    with pytest.raises(AuthorizationError):
        authenticator.authorize(Principal(user='eve'))
