"""
apacheconf Web API Tests
Exercises the Flask endpoints through the test client.
"""

import os
import sys
import pytest

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from webapp import app


PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
HTTPD_CONF = os.path.join(PROJECT_ROOT, "datasets", "apache", "httpd.conf")


@pytest.fixture
def client():
    app.config['TESTING'] = True
    with app.test_client() as client:
        yield client


class TestParseEndpoint:

    def test_health(self, client):
        resp = client.get('/api/health')
        assert resp.status_code == 200
        assert resp.get_json() == {"status": "ok"}

    def test_upload(self, client):
        with open(HTTPD_CONF, 'rb') as f:
            resp = client.post('/api/parse', data={'config_file': (f, 'httpd.conf')},
                               content_type='multipart/form-data')
        assert resp.status_code == 200
        data = resp.get_json()
        assert data["filename"] == "httpd.conf"
        assert data["summary"]["blocks"] == 8
        assert data["entries"][0] == {"ServerRoot": ['"/etc/apache"']}

    def test_content_field(self, client):
        resp = client.post('/api/parse', data={'content': '<VirtualHost 10.11.12.13>\n</VirtualHost>'})
        assert resp.status_code == 200
        assert resp.get_json()["entries"] == [
            {"kind": "VirtualHost", "ip_addr": [10, 11, 12, 13], "entries": []}
        ]

    def test_flat_view(self, client):
        resp = client.post('/api/parse?view=flat',
                           data={'content': '<Directory /srv>\n  Options None\n</Directory>\n'})
        flat = resp.get_json()["flat"]
        assert flat["flat_keys"] == {"Directory /srv::Options": [["None"]]}
        assert flat["blocks"] == ["Directory /srv"]

    def test_missing_input(self, client):
        resp = client.post('/api/parse', data={})
        assert resp.status_code == 400
        assert resp.get_json()["error"] == "No file uploaded"

    def test_parse_error(self, client):
        resp = client.post('/api/parse', data={'content': 'Listen 80\n<VirtualHost 10.0.0.1:80>\n'})
        assert resp.status_code == 422
        error = resp.get_json()["error"]
        assert error["type"] == "UnterminatedBlock"
        assert error["line"] == 2


class TestRenderEndpoint:

    def test_render(self, client):
        resp = client.post('/api/render', data={'content': 'Options Indexes \\\n  FollowSymLinks\n'})
        assert resp.status_code == 200
        assert resp.mimetype == 'text/plain'
        assert resp.get_data(as_text=True) == "Options Indexes FollowSymLinks\n"

    def test_render_parse_error(self, client):
        resp = client.post('/api/render', data={'content': 'BareKeyword\n'})
        assert resp.status_code == 422
        assert resp.get_json()["error"]["type"] == "MalformedDirective"
