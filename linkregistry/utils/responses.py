"""API Gateway (Lambda proxy) response builders

Successful responses carry the registry payload. Errors share one body shape:

    {"code": "<HTTP status>", "message": "<human readable reason>"}
"""

import json
from typing import Any

from linkregistry.types import LambdaResponse


JSON_HEADERS = {'Content-Type': 'application/json; charset=utf-8'}


def _response(status: int, body: dict[str, Any], headers: dict[str, str] | None = None) -> LambdaResponse:
    return {
        'statusCode': status,
        'headers': {**JSON_HEADERS, **(headers or {})},
        'body': json.dumps(body, ensure_ascii=False),
    }


def response_error(status: int, message: str) -> LambdaResponse:
    return _response(status, {'code': str(status), 'message': message})


def response_200(*, link_id: str, link: str) -> LambdaResponse:
    return _response(200, {'id': link_id, 'link': link})


def response_307(*, link: str) -> LambdaResponse:
    return _response(307, {'link': link}, headers={'Location': link})


def response_400(message: str = 'Bad Request') -> LambdaResponse:
    return response_error(400, message)


def response_403(message: str = 'forbidden') -> LambdaResponse:
    return response_error(403, message)


def response_404(message: str = 'Not Found') -> LambdaResponse:
    return response_error(404, message)


def response_500(message: str = 'Internal Server Error') -> LambdaResponse:
    return response_error(500, message)


def response_503(message: str = 'Service Unavailable') -> LambdaResponse:
    return response_error(503, message)
