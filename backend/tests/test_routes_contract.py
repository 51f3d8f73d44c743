from app import get_document, get_registry
from app.openapi_parts.helpers import path_template_from_rule

INTERNAL_ENDPOINTS = {'static', 'openapi_spec', 'docs_index', 'health'}


def _flask_routes(app):
    routes = set()
    for rule in app.url_map.iter_rules():
        if rule.endpoint in INTERNAL_ENDPOINTS:
            continue
        for method in rule.methods - {'HEAD', 'OPTIONS'}:
            routes.add((method.lower(), path_template_from_rule(rule.rule)))
    return routes


def test_path_template_from_rule():
    assert path_template_from_rule('/employees/<uuid:id>') == '/employees/{id}'
    assert path_template_from_rule('/a/<x>/b/<int:y>') == '/a/{x}/b/{y}'
    assert path_template_from_rule('/employees') == '/employees'


def test_every_documented_operation_has_a_route(app_instance):
    with app_instance.app_context():
        documented = {op.key for op in get_registry().finalize().operations}
    assert documented == _flask_routes(app_instance)


def test_documented_operation_ids_match_handlers(app_instance):
    with app_instance.app_context():
        doc = get_document()
    ids = {op['operationId'] for ops in doc['paths'].values() for op in ops.values()}
    handlers = {ep.split('.', 1)[1] for ep in app_instance.view_functions if ep.startswith('employees.')}
    assert ids == handlers


def test_registry_is_finalized_at_startup(app_instance):
    with app_instance.app_context():
        assert get_registry().is_finalized
