"""Documentation Route: human-readable API reference at GET /.

Invariants:
    - The only GET route reachable without an API key
    - Served as text/html with the CORS headers
"""

from fastapi import APIRouter, Depends

from sql_gateway.api.dependencies import GatewayContext, get_context
from sql_gateway.api.responses import html_response

router = APIRouter(tags=["docs"])

_DOCS_HTML = """<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8">
  <title>SQL Gateway API</title>
  <style>
    body { font-family: Arial, sans-serif; max-width: 1000px; margin: 50px auto; padding: 20px; }
    h2 { border-bottom: 2px solid #336791; padding-bottom: 5px; }
    .endpoint { background: #f5f5f5; padding: 15px; margin: 10px 0; border-radius: 5px; }
    .method { font-weight: bold; color: white; padding: 3px 8px; border-radius: 3px; }
    .get { background: #61affe; } .post { background: #49cc90; }
    .put { background: #fca130; } .delete { background: #f93e3e; }
    pre { background: #2d2d2d; color: #f8f8f2; padding: 15px; border-radius: 5px; overflow-x: auto; }
  </style>
</head>
<body>
  <h1>SQL Gateway API</h1>
  <p>REST endpoints over a single SQL database. Every endpoint except this page
  requires the <code>X-API-Key</code> header. Request bodies are read as JSON
  whatever their <code>Content-Type</code>.</p>

  <h2>Endpoints</h2>
  <div class="endpoint">
    <span class="method get">GET</span> <code>/tables</code>
    <p>List all tables.</p>
    <pre>curl -H "X-API-Key: $API_KEY" http://localhost:8000/tables</pre>
  </div>
  <div class="endpoint">
    <span class="method get">GET</span> <code>/tables/:table?limit=100&amp;offset=0</code>
    <p>Page through a table. <code>limit</code> defaults to 100, <code>offset</code> to 0.</p>
    <pre>curl -H "X-API-Key: $API_KEY" "http://localhost:8000/tables/users?limit=10&amp;offset=0"</pre>
  </div>
  <div class="endpoint">
    <span class="method get">GET</span> <code>/tables/:table/:id</code>
    <p>Fetch one record by id.</p>
    <pre>curl -H "X-API-Key: $API_KEY" http://localhost:8000/tables/users/1</pre>
  </div>
  <div class="endpoint">
    <span class="method post">POST</span> <code>/tables/:table</code>
    <p>Create a record from a JSON object.</p>
    <pre>curl -X POST http://localhost:8000/tables/users \\
  -H "X-API-Key: $API_KEY" -H "Content-Type: application/json" \\
  -d '{"name": "John Doe", "email": "john@example.com"}'</pre>
  </div>
  <div class="endpoint">
    <span class="method put">PUT</span> <code>/tables/:table/:id</code>
    <p>Update a record.</p>
    <pre>curl -X PUT http://localhost:8000/tables/users/1 \\
  -H "X-API-Key: $API_KEY" -H "Content-Type: application/json" \\
  -d '{"name": "Jane Doe"}'</pre>
  </div>
  <div class="endpoint">
    <span class="method delete">DELETE</span> <code>/tables/:table/:id</code>
    <p>Delete a record.</p>
    <pre>curl -X DELETE -H "X-API-Key: $API_KEY" http://localhost:8000/tables/users/1</pre>
  </div>
  <div class="endpoint">
    <span class="method post">POST</span> <code>/query</code>
    <p>Run SQL with bound parameters.</p>
    <pre>curl -X POST http://localhost:8000/query \\
  -H "X-API-Key: $API_KEY" -H "Content-Type: application/json" \\
  -d '{"query": "SELECT * FROM users WHERE email LIKE ?", "params": ["%@example.com"]}'</pre>
  </div>

  <h2>Response Format</h2>
  <pre>{"success": true, "data": ..., "meta": ...}</pre>
  <pre>{"success": false, "error": "Error description"}</pre>
</body>
</html>
"""


@router.get("/", include_in_schema=False)
async def api_docs(context: GatewayContext = Depends(get_context)):
    return html_response(_DOCS_HTML, context.settings)
