# school_admin/schemas/common.py
"""Shared schema base classes and helpers."""
from datetime import datetime
from typing import Any, Dict, Mapping, Optional, Type, TypeVar
from uuid import UUID

from pydantic import BaseModel, ConfigDict, ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from ..core.exceptions import ValidationError
from ..utils.pagination import Paginator

M = TypeVar("M", bound=BaseModel)


class CamelModel(BaseModel):
    """camelCase on the wire, snake_case in Python"""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    def to_response(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")


class RecordOut(CamelModel):
    id: UUID
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class Address(CamelModel):
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    pincode: Optional[str] = None

    def is_complete(self) -> bool:
        return all([self.street, self.city, self.state, self.pincode])


def format_validation_error(exc: PydanticValidationError) -> str:
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()))
        messages.append(f"{location}: {error.get('msg')}" if location else error.get("msg", "Invalid input"))
    return "; ".join(messages) or "Invalid input"


def parse_payload(schema: Type[M], data: Mapping[str, Any]) -> M:
    """Validate a loose mapping (JSON body or form fields) into `schema`.

    Empty strings from HTML forms are treated as absent values.
    """
    cleaned = {key: value for key, value in data.items() if value != ""}
    try:
        return schema.model_validate(cleaned)
    except PydanticValidationError as e:
        raise ValidationError(format_validation_error(e))


def serialize(schema: Type[CamelModel], obj: Any) -> Dict[str, Any]:
    return schema.model_validate(obj).to_response()


def serialize_page(schema: Type[CamelModel], key: str, result: Dict[str, Any]) -> Dict[str, Any]:
    """Envelope for a BaseService.get_paginated result"""
    items = [serialize(schema, obj) for obj in result["items"]]
    return {
        "success": True,
        "count": len(items),
        **Paginator.create_meta(result["page"], result["size"], result["total"]),
        key: items,
    }
