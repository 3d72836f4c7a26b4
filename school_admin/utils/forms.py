# school_admin/utils/forms.py
"""Request body helpers for endpoints that take either JSON or multipart forms."""
from typing import Any, Dict, List, Tuple
import json

from fastapi import Request
from starlette.datastructures import UploadFile

from ..core.exceptions import ValidationError


async def read_payload(request: Request) -> Tuple[Dict[str, Any], Dict[str, List[UploadFile]]]:
    """Return (fields, files). Repeated form keys collapse to a list."""
    content_type = request.headers.get("content-type", "")

    if content_type.startswith("multipart/form-data") or content_type.startswith("application/x-www-form-urlencoded"):
        form = await request.form()
        fields: Dict[str, Any] = {}
        files: Dict[str, List[UploadFile]] = {}
        for key, value in form.multi_items():
            if isinstance(value, UploadFile):
                if value.filename:
                    files.setdefault(key, []).append(value)
                continue
            if key in fields:
                existing = fields[key]
                fields[key] = existing + [value] if isinstance(existing, list) else [existing, value]
            else:
                fields[key] = value
        return fields, files

    body = await request.body()
    if not body:
        return {}, {}
    try:
        data = json.loads(body)
    except ValueError:
        raise ValidationError("Malformed JSON body")
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data, {}


def coerce_list(value: Any) -> List[Any]:
    """List, JSON-encoded list, or a single scalar"""
    if value is None or value == "":
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    if isinstance(value, str):
        try:
            parsed = json.loads(value)
        except ValueError:
            return [value]
        return parsed if isinstance(parsed, list) else [parsed]
    return [value]


def coerce_mapping(value: Any) -> Any:
    """Decode a JSON object sent as a form string; other values pass through"""
    if isinstance(value, str):
        try:
            parsed = json.loads(value)
        except ValueError:
            return value
        return parsed
    return value
