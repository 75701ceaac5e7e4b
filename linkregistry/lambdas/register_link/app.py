import base64
import binascii
import json
import logging

from linkregistry.core import GraphemeIdGenerator, LinkValidator, RegistryService, Sha3ContentHasher
from linkregistry.dao.redis import LinkRedisDAO
from linkregistry.dao.exceptions import DataStoreError, InconsistentWriteError, LinkAlreadyExistsError
from linkregistry.exceptions import AuthorizationError, ConfigurationError, ValidationError
from linkregistry.constants import Event
from linkregistry.types import LambdaContext, LambdaEvent, LambdaResponse
from linkregistry.utils import app_prefix, load_config, redis_kwargs, RegistrySettings, TokenAuthenticator
from linkregistry.utils.helpers import guarantee_500_response
from linkregistry.utils.responses import response_200, response_400, response_403, response_500


logger = logging.getLogger(__name__)


def request_body(event: LambdaEvent) -> dict:
    """Decode the JSON object carried by an API Gateway event

    Raises:
        ValueError:
            If the body is not valid (optionally base64 encoded) JSON, or not a JSON object.
    """
    raw = event.get('body') or '{}'
    if event.get('isBase64Encoded'):
        try:
            raw = base64.b64decode(raw, validate=True).decode('utf-8')
        except (binascii.Error, UnicodeDecodeError) as e:
            raise ValueError('invalid base64 body') from e

    try:
        body = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ValueError('invalid JSON body') from e

    if not isinstance(body, dict):
        raise ValueError('JSON body must be an object')
    return body


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to register links (POST /link)

    This Lambda handler follows this procedure to register links:
    - Step 1: Authenticate the caller (HTTP Basic: API user + API key)
    - Step 2: Extract link and optional identifier from request body
    - Step 3: Register the link (validate, generate identifier, deduplicate, store)
    - Step 4: Respond with the identifier the link is registered under

    HTTP responses:
        200: Link registered (or already registered)
            id: identifier of the link; may differ from the requested one if the
                same link was registered before
            link: the registered link
        400: Bad client request
            invalid JSON, invalid link or identifier, or identifier already taken
        403: Forbidden
            missing, malformed or wrong credentials
        500: Internal server error
            configuration or link store failure

    Args:
        event (LambdaEvent):
            API Gateway event payload in Lambda Proxy format.
        context (LambdaContext):
            AWS Lambda context object containing runtime information.

    Returns:
        LambdaResponse:
            JSON-serializable response following API Gateway Lambda Proxy output format.

    Example:
        >>> event = {'body': '{"link": "http://example.com", "id": "abc123"}', 'headers': {...}}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        200
        >>> json.loads(response['body'])
        {'id': 'abc123', 'link': 'http://example.com'}
    """
    # 0- Get application's config
    try:
        app_config = load_config('register_link')
        settings = RegistrySettings.from_config(app_config)
    except ConfigurationError:
        logger.exception('Failed to load AppConfig for register link function. Responding with 500.')
        return response_500()

    # 1- Authenticate the caller
    authenticator = TokenAuthenticator(user=settings.api_user, tokens=settings.api_keys)
    try:
        principal = authenticator.require(event)
    except AuthorizationError:
        logger.info('Caller is not allowed to register links. Responding with 403.', extra={'event': Event.ACCESS_DENIED})
        return response_403('forbidden')

    # 2- Extract link and identifier from request body
    try:
        body = request_body(event)
    except ValueError as e:
        logger.info('Malformed request body. Responding with 400.', extra={'event': Event.INVALID_REQUEST_BODY, 'reason': str(e)})
        return response_400(f'Bad Request ({e})')
    link = body.get('link')
    link_id = body.get('id')

    # 3- Register the link
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
        record = service.register(link, link_id=link_id)
    except ValidationError as e:
        return response_400(str(e))
    except LinkAlreadyExistsError:
        return response_400('something already exists at that id')
    except InconsistentWriteError:
        logger.exception(
            'Link stored without hash index entry. Responding with 500.',
            extra={'event': Event.INCONSISTENT_WRITE, 'user': principal.user},
        )
        return response_500('failed to store id and link')
    except DataStoreError:
        logger.exception('Failed to store id and link. Responding with 500.', extra={'event': Event.DATA_STORE_UNAVAILABLE})
        return response_500('failed to store id and link')

    # 4- Respond with the registered identifier
    return response_200(link_id=record.link_id, link=record.link)
