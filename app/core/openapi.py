"""OpenAPI metadata and customization utilities.

Provides a helper to enrich the generated OpenAPI schema with:
- Tags metadata
- The shared response envelope and the error responses of ``POST /contact``

This keeps documentation concerns decoupled from the app factory.
"""

from __future__ import annotations

from typing import Any, Dict

from fastapi import FastAPI

ENVELOPE_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["success", "message"],
    "properties": {
        "success": {"type": "boolean"},
        "message": {"type": "string"},
        "errors": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "field": {"type": "string"},
                    "message": {"type": "string"},
                },
            },
        },
        "data": {"type": "object"},
    },
}

CONTACT_RESPONSES = {
    "200": "Submission stored; data.id holds the document id.",
    "400": "Malformed body or field validation errors.",
    "413": "Request body exceeds the size limit.",
    "429": "Too many submissions from this client.",
    "500": "Submission could not be stored.",
}


def apply_openapi_customizations(app: FastAPI) -> None:
    """Patch FastAPI's OpenAPI generation to add metadata and envelopes.

    - Registers ``ApiResponse`` under components.schemas
    - Documents every status code of ``POST /contact`` with that schema
    - Adds tags metadata if not present
    """

    original_openapi = app.openapi

    def custom_openapi() -> Dict[str, Any]:
        if app.openapi_schema:
            return app.openapi_schema

        schema = original_openapi()

        components = schema.setdefault("components", {})
        component_schemas = components.setdefault("schemas", {})
        component_schemas.setdefault("ApiResponse", ENVELOPE_SCHEMA)

        # Tags metadata
        tags = schema.setdefault("tags", [])
        existing_tag_names = {t.get("name") for t in tags}
        desired_tags = [
            {
                "name": "Contact",
                "description": "Contact form submission.",
            },
            {
                "name": "Health",
                "description": "Liveness checks.",
            },
        ]
        for tag in desired_tags:
            if tag["name"] not in existing_tag_names:
                tags.append(tag)

        operation = schema.get("paths", {}).get("/contact", {}).get("post")
        if isinstance(operation, dict):
            operation["responses"] = {
                code: {
                    "description": description,
                    "content": {
                        "application/json": {
                            "schema": {"$ref": "#/components/schemas/ApiResponse"}
                        }
                    },
                }
                for code, description in CONTACT_RESPONSES.items()
            }

        app.openapi_schema = schema
        return schema

    app.openapi = custom_openapi  # type: ignore[assignment]
