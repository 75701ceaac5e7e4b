"""Unit tests for API Gateway response builders."""

import json

import pytest

from linkregistry.utils.responses import (
    response_200,
    response_307,
    response_400,
    response_403,
    response_404,
    response_500,
    response_503,
    response_error,
)


def test_response_200():
    response = response_200(link_id='🐶🐱', link='http://example.com')

    assert response['statusCode'] == 200
    assert response['headers']['Content-Type'] == 'application/json; charset=utf-8'
    assert json.loads(response['body']) == {'id': '🐶🐱', 'link': 'http://example.com'}
    assert '🐶🐱' in response['body']  # not escaped


def test_response_307():
    response = response_307(link='https://example.com/a?b=c')

    assert response['statusCode'] == 307
    assert response['headers']['Location'] == 'https://example.com/a?b=c'
    assert json.loads(response['body']) == {'link': 'https://example.com/a?b=c'}


@pytest.mark.parametrize(
    'builder, status, message',
    [
        (response_400, 400, 'Bad Request'),
        (response_403, 403, 'forbidden'),
        (response_404, 404, 'Not Found'),
        (response_500, 500, 'Internal Server Error'),
        (response_503, 503, 'Service Unavailable'),
    ],
)
def test_error_responses_defaults(builder, status, message):
    response = builder()

    assert response['statusCode'] == status
    assert json.loads(response['body']) == {'code': str(status), 'message': message}


def test_response_error_custom_message():
    response = response_error(418, "I'm a teapot")
    assert json.loads(response['body']) == {'code': '418', 'message': "I'm a teapot"}
