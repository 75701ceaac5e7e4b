"""Utility functions for application configuration management.

This module provides a standardized interface for Lambda functions to access
configuration data stored in **AWS AppConfig**. Each environment (`APP_ENV`) has
a dedicated AppConfig *Environment* within the shared AppConfig *Application*
identified by `APP_NAME`. Configuration data is stored as a JSON document under
a configuration profile (typically `backend-config`).

The configuration JSON follows this structure:

    {
        "build": 7,
        "active_backend": "redis",
        "configs": {
            "redirect_link": {
                "redis": { ... },
                "registry": { ... }
            },
            "register_link": {
                "redis": { ... },
                "registry": {
                    "id_length": 5,
                    "atomic_claim": true,
                    "api_user": "kit",
                    "api_keys": ["..."]
                }
            }
        }
    }

Typical usage inside a Lambda handler:
    >>> from linkregistry.utils.config import load_config, RegistrySettings
    >>> config = load_config('register_link')
    >>> config['redis']['host']
    'redis-15501.host.docker.internal'
    >>> RegistrySettings.from_config(config).id_length
    5
"""

import os
import json
import functools
import urllib.parse
import urllib.request
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

import boto3

from linkregistry.constants import ENV, Alphabet, Defaults, Limits
from linkregistry.core.graphemes import GraphemeAlphabet
from linkregistry.exceptions import BadConfigurationError
from linkregistry.types import LambdaConfiguration
from linkregistry.utils.helpers import require_environment
from linkregistry.utils.runtime import running_locally


logger = logging.getLogger(__name__)


def app_env() -> str:
    return os.environ.get(ENV.App.APP_ENV, 'local').lower()


def app_name() -> str | None:
    return os.environ.get(ENV.App.APP_NAME)


def app_prefix() -> str | None:
    """Return '<app name>:<app env>' to namespace Redis keys, or None if APP_NAME is not set."""
    return None if app_name() is None else f'{app_name()}:{app_env()}'


def _lambda_section(document: dict[str, Any], lambda_name: str) -> LambdaConfiguration:
    """Extract the active backend and registry settings of one lambda from an AppConfig document."""
    backend = document['active_backend']
    section = document['configs'][lambda_name]
    return {backend: section[backend], 'registry': section.get('registry', {})}


def _sam_load_local_appconfig(func: Callable) -> Callable:  # pragma: no cover
    """Decorator: load AppConfig from a local AppConfig Agent when running under SAM.

    Behavior:
        - If the application is running locally and `APPCONFIG_AGENT_URL` is set
          to a safe local URL, fetch the app configuration JSON from the local
          AppConfig agent.
        - Else, call the wrapped function (which pulls from AWS AppConfig via boto3).

    Environment variables used:
        APPCONFIG_AGENT_URL     : Base URL of the local AppConfig Agent (e.g., http://appconfig-agent:2772).
        APPCONFIG_PROFILE_NAME  : Optional profile name (default: "backend-config").
    """

    # ruff: noqa: E701
    def __validate_appconfig_url(url: str) -> str:
        if not url:
            return ''
        components = urllib.parse.urlparse(url)
        if components.scheme not in {'http', 'https'}:
            raise BadConfigurationError(f'Bad scheme {url}')
        if components.hostname not in {'localhost', '127.0.0.1', 'host.docker.internal', 'appconfig-agent'}:
            raise BadConfigurationError(f'Bad host {url}')
        if components.port not in {2772, None}:
            raise BadConfigurationError(f'Bad port {url}')
        return url

    # ruff: enable

    @functools.wraps(func)
    def wrapper(lambda_name: str) -> LambdaConfiguration:
        agent_url = __validate_appconfig_url(os.getenv(ENV.AppConfig.AGENT_URL))
        if not running_locally() or not agent_url:
            return func(lambda_name)

        profile_name = os.getenv(ENV.AppConfig.PROFILE_NAME, 'backend-config')
        url = f'{agent_url}/applications/{app_name()}/environments/{app_env()}/configurations/{profile_name}'

        logger.debug('Trying to load AppConfig from local agent.', extra={'agentUrl': url, 'lambdaName': lambda_name})
        with urllib.request.urlopen(url, timeout=5) as r:  # noqa: S310
            document = json.load(r)

        data = _lambda_section(document, lambda_name)
        logger.debug('Loaded AppConfig from local agent.', extra={'lambdaName': lambda_name, 'build': document.get('build')})
        return data

    return wrapper


@_sam_load_local_appconfig
@require_environment(ENV.AppConfig.APP_ID, ENV.AppConfig.ENV_ID, ENV.AppConfig.PROFILE_ID)
def load_config(lambda_name: str) -> LambdaConfiguration:
    """Load configuration for a given Lambda from AWS AppConfig.

    Fetches the AppConfig JSON once and returns the section relevant
    to the requested Lambda function (e.g., 'redirect_link', 'register_link').

    Environment variables required:
        APPCONFIG_APP_ID       : AppConfig Application ID
        APPCONFIG_ENV_ID       : AppConfig Environment ID
        APPCONFIG_PROFILE_ID   : AppConfig Configuration Profile ID

    Returns:
        dict: {"<active backend>": {...}, "registry": {...}}
    """
    logger.debug('Trying to load AppConfig from AWS AppConfig.', extra={'lambdaName': lambda_name})

    appconfig = boto3.client('appconfigdata')

    # Start an AppConfig data session
    session_token = appconfig.start_configuration_session(
        ApplicationIdentifier=os.environ[ENV.AppConfig.APP_ID],
        EnvironmentIdentifier=os.environ[ENV.AppConfig.ENV_ID],
        ConfigurationProfileIdentifier=os.environ[ENV.AppConfig.PROFILE_ID],
    )['InitialConfigurationToken']

    # Fetch the configuration
    response = appconfig.get_latest_configuration(ConfigurationToken=session_token)
    content = response['Configuration'].read()
    document = json.loads(content.decode('utf-8'))

    data = _lambda_section(document, lambda_name)
    logger.debug('Loaded AppConfig from AWS AppConfig.', extra={'lambdaName': lambda_name, 'build': document.get('build')})
    return data


def redis_kwargs(config: LambdaConfiguration) -> dict[str, Any]:
    """Turn the 'redis' config section into RedisClientMixin keyword arguments."""
    return {f'redis_{k}': v for k, v in config.get('redis', {}).items()}


@dataclass(frozen=True)
class RegistrySettings:
    id_length: int = Defaults.ID_LENGTH                  # Clusters per generated identifier
    atomic_claim: bool = Defaults.ATOMIC_CLAIM           # Claim identifiers with SET NX
    generated_alphabet: str = Alphabet.GENERATED         # Clusters generated identifiers are drawn from
    permitted_alphabet: str = Alphabet.PERMITTED         # Clusters caller-supplied identifiers may use
    api_user: str | None = None                          # Basic auth user allowed to register links
    api_keys: frozenset[str] = field(default_factory=frozenset)  # Accepted Basic auth passwords

    @classmethod
    def from_config(cls, config: LambdaConfiguration) -> 'RegistrySettings':
        """Build settings from the 'registry' config section, validating every value

        Raises:
            BadConfigurationError:
                If a value has the wrong type or is out of range, or if the
                generated alphabet is not a subset of the permitted alphabet.
        """
        section = config.get('registry') or {}

        id_length = section.get('id_length', Defaults.ID_LENGTH)
        if isinstance(id_length, bool) or not isinstance(id_length, int):
            raise BadConfigurationError(f'registry.id_length must be an integer (given type: {type(id_length)}).')
        if not Limits.MIN_ID_CLUSTERS <= id_length <= Limits.MAX_ID_CLUSTERS:
            raise BadConfigurationError(
                f'registry.id_length must be within [{Limits.MIN_ID_CLUSTERS}, {Limits.MAX_ID_CLUSTERS}] (given value: {id_length}).'
            )

        atomic_claim = section.get('atomic_claim', Defaults.ATOMIC_CLAIM)
        if not isinstance(atomic_claim, bool):
            raise BadConfigurationError(f'registry.atomic_claim must be a boolean (given type: {type(atomic_claim)}).')

        generated_alphabet = section.get('generated_alphabet', Alphabet.GENERATED)
        permitted_alphabet = section.get('permitted_alphabet', Alphabet.PERMITTED)
        for name, value in (('generated_alphabet', generated_alphabet), ('permitted_alphabet', permitted_alphabet)):
            if not isinstance(value, str) or not value:
                raise BadConfigurationError(f'registry.{name} must be a non-empty string.')
        if not GraphemeAlphabet(permitted_alphabet).covers(generated_alphabet):
            raise BadConfigurationError('registry.generated_alphabet must be a subset of registry.permitted_alphabet.')

        api_user = section.get('api_user')
        if api_user is not None and not isinstance(api_user, str):
            raise BadConfigurationError(f'registry.api_user must be a string (given type: {type(api_user)}).')

        api_keys = section.get('api_keys', [])
        if not isinstance(api_keys, list) or not all(isinstance(key, str) and key for key in api_keys):
            raise BadConfigurationError('registry.api_keys must be a list of non-empty strings.')

        return cls(
            id_length=id_length,
            atomic_claim=atomic_claim,
            generated_alphabet=generated_alphabet,
            permitted_alphabet=permitted_alphabet,
            api_user=api_user,
            api_keys=frozenset(api_keys),
        )
