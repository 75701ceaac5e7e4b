import logging
import urllib.parse

from linkregistry.core import GraphemeIdGenerator, LinkValidator, RegistryService, Sha3ContentHasher
from linkregistry.dao.redis import LinkRedisDAO
from linkregistry.dao.exceptions import DataStoreError
from linkregistry.exceptions import ConfigurationError, LinkNotFoundError, ValidationError
from linkregistry.constants import Event
from linkregistry.types import LambdaContext, LambdaEvent, LambdaResponse
from linkregistry.utils import app_prefix, load_config, redis_kwargs, RegistrySettings
from linkregistry.utils.helpers import guarantee_500_response
from linkregistry.utils.responses import response_307, response_400, response_404, response_500, response_503


logger = logging.getLogger(__name__)


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to resolve links (GET /{id})

    This Lambda handler follows this procedure to resolve links:
    - Step 1: Extract identifier from request path
    - Step 2: Look the identifier up in the registry
    - Step 3: Redirect client to the link

    HTTP responses:
        307: Successful redirect
            headers:
                Location: the registered link
            body: {"link": <link>}
        400: Bad client request
            missing identifier, or identifier with forbidden characters or length
        404: Not found
            no link registered under the identifier
        500: Internal server error
            configuration could not be loaded
        503: Service unavailable
            link store unreachable; the client may retry

    Args:
        event (LambdaEvent):
            API Gateway event payload containing the `id` path parameter.
        context (LambdaContext):
            AWS Lambda runtime context object (not used directly).

    Returns:
        LambdaResponse:
            API Gateway-compatible response including statusCode, headers, and body.

    Example:
        >>> event = {'pathParameters': {'id': 'abc123'}}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        307
        >>> response['headers']['Location']
        'http://example.com'
    """
    # 0- Get application's config
    try:
        app_config = load_config('redirect_link')
        settings = RegistrySettings.from_config(app_config)
    except ConfigurationError:
        logger.exception('Failed to load AppConfig for redirect link function. Responding with 500.')
        return response_500()

    # 1- Extract identifier from request's path
    link_id = (event.get('pathParameters') or {}).get('id')
    if link_id is None:
        logger.info('Missing "id" in path. Responding with 400.', extra={'event': Event.INVALID_IDENTIFIER})
        return response_400("missing 'id' in path")
    link_id = urllib.parse.unquote(link_id)

    # 2- Look the identifier up in the registry
    try:
        store = LinkRedisDAO(
            **redis_kwargs(app_config),
            hasher=Sha3ContentHasher(),
            atomic_claim=settings.atomic_claim,
            prefix=app_prefix(),
        )
        service = RegistryService(
            store=store,
            generator=GraphemeIdGenerator(settings.id_length, settings.generated_alphabet),
            validator=LinkValidator(settings.permitted_alphabet),
        )
        record = service.resolve(link_id)
    except ValidationError as e:
        return response_400(str(e))
    except LinkNotFoundError:
        logger.info('Link record not found. Responding with 404.', extra={'link_id': link_id, 'event': Event.LINK_NOT_FOUND})
        return response_404(link_id)
    except DataStoreError:
        logger.exception('Link store unreachable. Responding with 503.', extra={'event': Event.DATA_STORE_UNAVAILABLE})
        return response_503('link store unavailable, try again later')

    # 3- Redirect client to the link
    logger.info('Redirecting client to link. Responding with 307.', extra={'link_id': link_id, 'event': Event.LINK_REDIRECT})
    return response_307(link=record.link)
