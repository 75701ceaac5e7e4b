from enum import StrEnum


class Limits:
    """Format limits for identifiers and links."""

    MIN_ID_CLUSTERS = 1
    MAX_ID_CLUSTERS = 10
    MAX_LINK_LENGTH = 2083  # matches common browser URL limits
    LINK_PREFIXES = ('http://', 'https://')
    MIN_LINK_LENGTH = len('http://')


class Alphabet:
    """Default identifier alphabets."""

    # fmt: off
    GENERATED = '🐶🐱🐭🐹🐰🦊🐻🐼🐨🐯🦁🐮🐷🐸🐵🐔🐧🐦🐤🦉🐺🐗🐴🦄🐝🦋'
    PERMITTED = (
        '0123456789'
        'ABCDEFGHIJKLMNOPQRSTUVWXYZ'
        'abcdefghijklmnopqrstuvwxyz'
        '-_'
        + GENERATED +
        '🥕💻✨⚡️⭐️🔥'
    )
    # fmt: on


class Defaults:
    """Default registry settings."""

    ID_LENGTH = 5
    ATOMIC_CLAIM = True


class ENV:
    """Environment variable names."""

    class App(StrEnum):
        APP_ENV = 'APP_ENV'
        APP_NAME = 'APP_NAME'
        AWS_SAM_LOCAL = 'AWS_SAM_LOCAL'
        LOG_LEVEL = 'LOG_LEVEL'

    class AppConfig(StrEnum):
        APP_ID = 'APPCONFIG_APP_ID'
        ENV_ID = 'APPCONFIG_ENV_ID'
        PROFILE_ID = 'APPCONFIG_PROFILE_ID'
        AGENT_URL = 'APPCONFIG_AGENT_URL'
        PROFILE_NAME = 'APPCONFIG_PROFILE_NAME'


# Error codes
UNKNOWN_INTERNAL_SERVER_ERROR = 'UNKNOWN_INTERNAL_SERVER_ERROR'


class Event(StrEnum):
    """Values of the `event` field attached to log records."""

    INVALID_IDENTIFIER = 'INVALID_IDENTIFIER'
    INVALID_LINK = 'INVALID_LINK'
    INVALID_REQUEST_BODY = 'INVALID_REQUEST_BODY'
    LINK_NOT_FOUND = 'LINK_NOT_FOUND'
    LINK_ALREADY_EXISTS = 'LINK_ALREADY_EXISTS'
    LINK_DEDUPLICATED = 'LINK_DEDUPLICATED'
    LINK_STORED = 'LINK_STORED'
    LINK_REDIRECT = 'LINK_REDIRECT'
    INCONSISTENT_WRITE = 'INCONSISTENT_WRITE'
    DATA_STORE_UNAVAILABLE = 'DATA_STORE_UNAVAILABLE'
    ACCESS_DENIED = 'ACCESS_DENIED'
