from linkregistry.utils.config import app_env, app_name, app_prefix, load_config, redis_kwargs, RegistrySettings
from linkregistry.utils.helpers import require_environment, guarantee_500_response
from linkregistry.utils.auth import TokenAuthenticator, Principal
from linkregistry.utils.logging import initialize_logging


__all__ = [
    'app_env',
    'app_name',
    'app_prefix',
    'load_config',
    'redis_kwargs',
    'RegistrySettings',
    'require_environment',
    'guarantee_500_response',
    'TokenAuthenticator',
    'Principal',
    'initialize_logging',
]
