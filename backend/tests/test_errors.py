import pytest
from app import create_app
from app.openapi_parts import Registry, ResponseDescriptor, ValidationErrors, UnknownSchemaError


def test_unknown_path_returns_error_json(client):
    resp = client.get('/non-existent-path')
    # Flask default 404 should be wrapped by error handler
    assert resp.status_code == 404
    body = resp.get_json()
    assert 'error' in body
    assert body['error']['status'] == 404
    assert 'detail' in body['error']


@pytest.mark.parametrize('method,url', [
    ('get', '/employees'),
    ('post', '/employees'),
    ('get', '/employees/123e4567-e89b-12d3-a456-426614174000'),
])
def test_placeholder_handlers_answer_not_implemented(client, method, url):
    resp = getattr(client, method)(url)
    assert resp.status_code == 501
    body = resp.get_json()
    assert body['error']['status'] == 501
    assert body['error']['title'] == 'Not Implemented'


def test_get_employee_rejects_non_uuid(client):
    resp = client.get('/employees/not-a-uuid')
    assert resp.status_code == 404


def test_internal_error_shape(app_instance, monkeypatch):
    def boom(*a, **k):
        raise RuntimeError('explode')
    # view functions are bound at registration, so patch the endpoint table
    monkeypatch.setitem(app_instance.view_functions, 'employees.list_employees', boom)
    resp = app_instance.test_client().get('/employees')
    assert resp.status_code == 500
    body = resp.get_json()
    assert body['error']['status'] == 500
    assert body['error']['title'] == 'Internal Server Error'


def test_inconsistent_contract_fails_startup():
    registry = Registry('Broken', '0')
    registry.define_operation('get', '/things', responses=[ResponseDescriptor(200, 'OK', 'Thing')])
    with pytest.raises(ValidationErrors) as exc:
        create_app({'TESTING': True}, registry=registry)
    (err,) = exc.value.errors
    assert isinstance(err, UnknownSchemaError)
    assert err.name == 'Thing'
