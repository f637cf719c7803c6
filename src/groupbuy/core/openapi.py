"""OpenAPI 3.0 document and Swagger UI page for command/query routes."""
from __future__ import annotations

import dataclasses
import typing
from typing import Any

# (path, method) -> requestBody / parameters / tags for that operation
RouteSchemas = dict[tuple[str, str], dict[str, Any]]

_JSON_TYPES: dict[Any, str] = {
    str: "string",
    int: "integer",
    float: "number",
    bool: "boolean",
    list: "array",
    dict: "object",
}


def unwrap_optional(t: Any) -> Any:
    """X | None -> X; anything else unchanged."""
    args = typing.get_args(t)
    if args and type(None) in args:
        rest = [a for a in args if a is not type(None)]
        if len(rest) == 1:
            return rest[0]
    return t


def field_types(cls: type) -> dict[str, Any]:
    """Dataclass field name -> evaluated type (handles postponed annotations)."""
    try:
        hints = typing.get_type_hints(cls)
    except (NameError, TypeError):
        hints = {}
    return {f.name: hints.get(f.name, f.type) for f in dataclasses.fields(cls)}


def _json_type(t: Any) -> str:
    t = unwrap_optional(t)
    return _JSON_TYPES.get(typing.get_origin(t) or t, "string")


def _is_required(f: dataclasses.Field) -> bool:
    return f.default is dataclasses.MISSING and f.default_factory is dataclasses.MISSING


def schema_from_dataclass(cls: type) -> dict[str, Any]:
    if not dataclasses.is_dataclass(cls):
        return {"type": "object"}
    types = field_types(cls)
    props: dict[str, Any] = {}
    required: list[str] = []
    for f in dataclasses.fields(cls):
        if f.name.startswith("_"):
            continue
        props[f.name] = {"type": _json_type(types[f.name]), "description": f.name.replace("_", " ")}
        if _is_required(f):
            required.append(f.name)
    schema: dict[str, Any] = {"type": "object", "properties": props}
    if required:
        schema["required"] = required
    return schema


def parameters_from_dataclass(cls: type) -> list[dict[str, Any]]:
    """Query-string parameters for GET queries."""
    if not dataclasses.is_dataclass(cls):
        return []
    types = field_types(cls)
    return [
        {
            "name": f.name,
            "in": "query",
            "required": _is_required(f),
            "schema": {"type": _json_type(types[f.name])},
        }
        for f in dataclasses.fields(cls)
        if not f.name.startswith("_")
    ]


def build_openapi_spec(
    routes: list[Any],
    *,
    title: str = "API",
    version: str = "0.1.0",
    route_schemas: RouteSchemas | None = None,
) -> dict[str, Any]:
    from starlette.routing import Route

    route_schemas = route_schemas or {}
    paths: dict[str, Any] = {}
    for route in routes:
        if not isinstance(route, Route) or not route.include_in_schema:
            continue
        path_item = paths.setdefault(route.path, {})
        for method in sorted(route.methods or ["GET"]):
            if method == "HEAD":
                continue
            method_lower = method.lower()
            op: dict[str, Any] = {
                "summary": f"{method} {route.path}",
                "responses": {
                    "200": {"description": "OK", "content": {"application/json": {"schema": {"type": "object"}}}},
                    "4XX": {"description": "Error envelope"},
                },
            }
            schema = route_schemas.get((route.path, method_lower), {})
            for key in ("requestBody", "parameters", "tags"):
                if key in schema:
                    op[key] = schema[key]
            op.setdefault("tags", ["default"])
            path_item[method_lower] = op
    return {
        "openapi": "3.0.0",
        "info": {"title": title, "version": version},
        "paths": paths,
    }


SWAGGER_UI_HTML = """<!DOCTYPE html>
<html>
<head>
  <title>{title}</title>
  <link rel="stylesheet" type="text/css" href="https://unpkg.com/swagger-ui-dist@5/swagger-ui.css">
</head>
<body>
  <div id="swagger-ui"></div>
  <script src="https://unpkg.com/swagger-ui-dist@5/swagger-ui-bundle.js"></script>
  <script>
    SwaggerUIBundle({{
      url: "{openapi_path}",
      dom_id: "#swagger-ui",
    }});
  </script>
</body>
</html>
"""
