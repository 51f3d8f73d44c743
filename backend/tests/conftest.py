import os, sys, pytest
# Ensure backend directory is on path so 'app' and 'scripts' can be imported
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)
from app import create_app
from app.openapi_parts import Registry


@pytest.fixture(scope='session', autouse=True)
def app_instance():
    app = create_app({'TESTING': True})
    yield app


@pytest.fixture()
def client(app_instance):
    return app_instance.test_client()


@pytest.fixture()
def registry():
    return Registry('Test API', '0.0.1')
