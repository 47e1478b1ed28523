"""Quick manual check for the apacheconf web API (start webapp.py first)."""
import requests

with open('datasets/apache/httpd.conf', 'rb') as f:
    resp = requests.post('http://localhost:5000/api/parse',
        files={'config_file': ('httpd.conf', f)},
        params={'view': 'flat'},
    )

print("Status:", resp.status_code)
print("Response:", resp.text[:2000])

resp = requests.post('http://localhost:5000/api/parse',
    data={'content': '<VirtualHost 10.0.0.1:80>\nServerName example.org\n'},
)
print("Unterminated block:", resp.status_code, resp.json())
