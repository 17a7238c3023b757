from types import SimpleNamespace
from typing import Any, Dict, TypeVar
from marshmallow import INCLUDE, EXCLUDE, Schema, post_dump, post_load
from pgdb.utils.helpers import drop_nulls

EXCLUDE = EXCLUDE
JSON = Dict[str, Any]
MAX_REPR_LEN = 80

M = TypeVar("M", bound="BaseModel")


def _to_primitive(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.as_dict()
    if isinstance(value, list):
        return [_to_primitive(item) for item in value]
    return value


class BaseModel(SimpleNamespace):
    """Attribute container all models inherit from.

    Models are built by the `post_load` hook of their schema, or directly
    from keyword arguments. Attributes that are not passed stay unset and
    are skipped when the model is dumped.
    """

    def __repr__(self) -> str:
        repr_ = super().__repr__()
        if len(repr_) > MAX_REPR_LEN:
            return repr_[:MAX_REPR_LEN] + " ...)"
        return repr_

    def as_dict(self) -> JSON:
        """Nested models as plain dictionaries, keyed by attribute name."""
        return {key: _to_primitive(value) for key, value in vars(self).items()}

    def replace(self: M, **changes: Any) -> M:
        """Shallow copy with some attributes replaced."""
        values = dict(vars(self))
        values.update(changes)
        return type(self)(**values)


class BaseSchema(Schema):
    """The default schema for all models."""

    __model__: Any = BaseModel
    """Class instantiated by `load`."""

    class Meta:
        unknown = INCLUDE

    @post_load
    def make_object(self, data: JSON, **kwargs: Any) -> "__model__":
        return self.__model__(**data)


class ManifestSchema(BaseSchema):
    """Schema for documents written to the API server.

    Unset fields are left out of the dumped document instead of being
    serialized as null.
    """

    @post_dump
    def remove_nulls(self, data: JSON, **kwargs: Any) -> JSON:
        return drop_nulls(data)
