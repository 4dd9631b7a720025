"""Script to generate the openapi json file."""

from pathlib import Path

import orjson
from fastapi.openapi.utils import get_openapi

from catalog_service.main import app


openapi_schema = get_openapi(
    title=app.title,
    version=app.version,
    routes=app.routes,
)

output = Path("docs/openapi.json")
output.parent.mkdir(parents=True, exist_ok=True)
output.write_bytes(orjson.dumps(openapi_schema, option=orjson.OPT_INDENT_2))
