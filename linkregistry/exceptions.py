"""Application-level exceptions.

Every exception carries an `error_code` which is logged alongside the event.
Storage exceptions live in `linkregistry.dao.exceptions` and extend
`LinkRegistryError` as well, so transport adapters can catch the whole family.
"""


class LinkRegistryError(Exception):
    """Base exception for all application-specific errors."""

    error_code = 'app:link_registry_error'


class ValidationError(LinkRegistryError):
    """Raised when a request carries a malformed identifier or link."""

    error_code = 'request:validation_error'


class InvalidIdentifierError(ValidationError):
    """Raised when an identifier is empty, too long or uses forbidden characters."""

    error_code = 'request:invalid_identifier_error'


class InvalidLinkError(ValidationError):
    """Raised when a link is too short, too long or not an http(s) URL."""

    error_code = 'request:invalid_link_error'


class LinkNotFoundError(LinkRegistryError):
    """Raised when an identifier has no link record."""

    error_code = 'request:link_not_found_error'


class AuthorizationError(LinkRegistryError):
    """Raised when a caller is not authenticated or not allowed to register links."""

    error_code = 'auth:authorization_error'


class ConfigurationError(LinkRegistryError):
    """Base exception for all configuration errors."""

    error_code = 'config:configuration_error'


class MissingEnvironmentVariableError(ConfigurationError):
    """Raised when a required environment variable is missing."""

    error_code = 'config:missing_environment_variable_error'


class BadConfigurationError(ConfigurationError):
    """Raised when the application is configured with invalid parameters."""

    error_code = 'config:bad_configuration_error'
