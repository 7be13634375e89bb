from __future__ import annotations

import types
from typing import Annotated, Any, Mapping, Optional, Union, get_args, get_origin

from pydantic import BaseModel
from pydantic.fields import FieldInfo

Shape = Mapping[str, Any]


def get_shape(schema: Any) -> Optional[Shape]:
    """
    Return `{field_key: annotation}` for a pydantic model, or None if `schema` has no fields.

    A mapping is accepted as an already-built shape, with nested mappings standing in
    for nested models.
    """
    if isinstance(schema, Mapping):
        return schema
    model = _unwrap_model(schema)
    if model is None:
        return None
    return {_field_key(name, field): field.annotation for name, field in model.model_fields.items()}


def get_nested_shape(annotation: Any) -> Optional[Shape]:
    if annotation is None:
        return None
    if isinstance(annotation, Mapping):
        return annotation
    model = _unwrap_model(annotation)
    if model is None:
        return None
    return get_shape(model)


def _field_key(name: str, field: FieldInfo) -> str:
    if isinstance(field.validation_alias, str):
        return field.validation_alias
    if field.alias:
        return field.alias
    return name


def _unwrap_model(annotation: Any) -> Optional[type[BaseModel]]:
    # Optional[Model], Model | None and Annotated[Model, ...] all resolve to Model.
    origin = get_origin(annotation)
    if origin is None:
        if isinstance(annotation, type) and issubclass(annotation, BaseModel):
            return annotation
        return None
    if origin is Annotated:
        return _unwrap_model(get_args(annotation)[0])
    if origin is Union or origin is types.UnionType:
        candidates = [
            model
            for model in (_unwrap_model(arg) for arg in get_args(annotation) if arg is not type(None))
            if model is not None
        ]
        if len(candidates) == 1:
            return candidates[0]
    return None
