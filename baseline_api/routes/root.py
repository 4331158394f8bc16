"""Root route."""

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

router = APIRouter()

_ROOT_HTML = """
<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <title>Baseline Compatibility Checker API</title>
  <style>
    body { font-family: system-ui, sans-serif; max-width: 42rem; margin: 2rem auto; padding: 0 1rem; }
    h1 { font-size: 1.25rem; font-weight: 600; }
    ul { list-style: none; padding: 0; }
    li { margin: 0.5rem 0; }
    a { color: #2563eb; text-decoration: none; }
    a:hover { text-decoration: underline; }
    .meta { color: #64748b; font-size: 0.875rem; margin-top: 1.5rem; }
  </style>
</head>
<body>
  <h1>Baseline Compatibility Checker API</h1>
  <p>Endpoints:</p>
  <ul>
    <li><a href="/docs">/docs</a>: Swagger UI</li>
    <li><a href="/redoc">/redoc</a>: ReDoc</li>
    <li><a href="/health">/health</a>: Liveness</li>
    <li><a href="/features/container-queries">/features/{token}</a>: Baseline status of one feature</li>
    <li>/check (POST): same lookup with a JSON body</li>
    <li>/analyze (POST): scan code, files or a folder</li>
  </ul>
  <p class="meta">POST /analyze with <code>{"code": "...", "filename": "styles.css"}</code>,
  <code>{"file_paths": ["/abs/app.js"]}</code> or <code>{"folder_path": "/abs/project"}</code>.
  See <a href="/docs">/docs</a> for details.</p>
</body>
</html>
"""


@router.get("/", response_class=HTMLResponse)
def root() -> str:
    """Root: welcome page with clickable links."""
    return _ROOT_HTML
