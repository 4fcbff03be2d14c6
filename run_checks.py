from fastapi.testclient import TestClient
from app.main import app

client = TestClient(app)

print('ROOT:')
print(client.get('/').json())

print('\nHEALTH:')
print(client.get('/health').json())

print('\nDB HEALTH:')
resp = client.get('/health/db')
print(resp.status_code, resp.json())

print('\nDEPARTMENTS:')
try:
    resp = client.get('/departments', params={'activeOnly': 'false'})
    print(resp.status_code, resp.json())
except Exception as e:
    print('Departments call raised exception:', e)
