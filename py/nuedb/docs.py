"""HTML documentation page served at ``GET /``."""

DOCS_TEMPLATE = """<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8">
    <meta name="viewport" content="width=device-width, initial-scale=1, shrink-to-fit=no">
    <title>API Documentation</title>
    <style>
      body { background-color: #121212; color: #ffffff; font-family: sans-serif; }
      .container { max-width: 960px; margin: 50px auto; }
      pre { background-color: #1e1e1e; padding: 10px; border-radius: 5px; }
    </style>
  </head>
  <body>
    <div class="container">
      <h1>API Documentation</h1>
      <h2>Endpoints</h2>
      <ul>
        <li><code>POST /write/:userId</code> - Writes data for a user (Max {{ max_payload_mb }} MB JSON)</li>
        <li><code>GET /read/:userId</code> - Reads data for a user</li>
        <li><code>GET /delete/:userId</code> - Deletes data for a user</li>
        <li><code>GET /</code> - API Documentation</li>
        <li><code>GET /dbinfo</code> - Shows database size information (<code>?format=json</code> for JSON)</li>
      </ul>
      <p>Data not read or written for {{ retention_days }} days is removed.</p>
      <h2>Examples</h2>
      <h3>Python</h3>
      <pre><code>import requests

# Write data
response = requests.post('{{ base_url }}write/user1', json={"json": {"key": "value"}})
print(response.text)

# Read data
response = requests.get('{{ base_url }}read/user1')
print(response.json())

# Delete data
response = requests.get('{{ base_url }}delete/user1')
print(response.text)

# DB Info
response = requests.get('{{ base_url }}dbinfo', params={"format": "json"})
print(response.json())</code></pre>
      <h3>cURL</h3>
      <pre><code># Write data
curl -X POST -H "Content-Type: application/json" -d '{"json":{"key":"value"}}' "{{ base_url }}write/user1"

# Read data
curl "{{ base_url }}read/user1"

# Delete data
curl "{{ base_url }}delete/user1"

# DB Info
curl "{{ base_url }}dbinfo?format=json"</code></pre>
      <h3>Example Responses</h3>
      <pre><code># Writing data
Data for user user1 has been written

# Reading data
{"key": "value"}

# Deleting data
Data for user user1 has been deleted

# Missing json body parameter
Missing json body parameter

# Deleting unknown user data
No data found for user user1

# DB info (JSON)
{"usedSize": 12345, "remainingSize": 2147471303, "maxDbSize": 2147483648, "keyCount": 1}</code></pre>
    </div>
  </body>
</html>
"""
