import pytest
from fastapi import FastAPI, HTTPException
from fastapi.testclient import TestClient
from pydantic import BaseModel

from authserver.core import config
from authserver.middleware import error_handler
from authserver.middleware.error_handler import error_name, register_error_handlers


class _Payload(BaseModel):
    name: str


def _build_app() -> FastAPI:
    app = FastAPI()
    register_error_handlers(app)

    @app.get('/boom')
    def boom():
        raise RuntimeError('database exploded')

    @app.get('/conflict')
    def conflict():
        raise HTTPException(status_code=409, detail='already taken')

    @app.post('/echo')
    def echo(payload: _Payload):
        return payload

    return app


@pytest.mark.parametrize(
    ('status_code', 'expected'),
    [
        (400, 'BadRequestError'),
        (401, 'UnauthorizedError'),
        (404, 'NotFoundError'),
        (500, 'InternalServerError'),
        (599, 'HttpError'),
    ],
)
def test_error_name_follows_status_phrase(status_code: int, expected: str) -> None:
    assert error_name(status_code) == expected


def test_http_exception_uses_error_envelope() -> None:
    response = TestClient(_build_app()).get('/conflict')

    assert response.status_code == 409
    assert response.json() == {
        'errors': [{'type': 'ConflictError', 'msg': 'already taken', 'path': '', 'location': ''}],
    }


def test_unknown_route_uses_error_envelope() -> None:
    response = TestClient(_build_app()).get('/missing')

    assert response.status_code == 404
    assert response.json()['errors'][0]['type'] == 'NotFoundError'


def test_validation_error_lists_failing_fields() -> None:
    response = TestClient(_build_app()).post('/echo', json={})

    assert response.status_code == 400
    assert response.json() == {
        'errors': [{'type': 'field', 'msg': 'Field required', 'path': 'name', 'location': 'body'}],
    }


def test_unexpected_error_returns_500_with_name_and_message() -> None:
    response = TestClient(_build_app()).get('/boom')

    assert response.status_code == 500
    assert response.json() == {
        'errors': [{'type': 'RuntimeError', 'msg': 'database exploded', 'path': '', 'location': ''}],
    }


def test_unexpected_error_hides_message_in_production(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config, 'APP_ENV', 'production')
    monkeypatch.setattr(config, 'DEBUG', False)

    response = TestClient(_build_app()).get('/boom')

    assert response.status_code == 500
    assert response.json()['errors'][0]['msg'] == error_handler.GENERIC_ERROR_MESSAGE
