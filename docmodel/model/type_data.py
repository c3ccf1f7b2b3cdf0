"""Type information for class model properties."""

import types
from dataclasses import dataclass
from typing import Any, Union, get_args, get_origin

from .markers import split_annotated

# Numeric promotions accepted on assignment (PEP 484 numeric tower)
_NUMERIC_PROMOTIONS: dict[type, tuple[type, ...]] = {
    float: (int,),
    complex: (int, float),
}


@dataclass(frozen=True, slots=True)
class TypeData:
    """Describes the declared type of a property or parameter.

    For generic aliases ``type`` holds the origin (``list`` for ``list[int]``)
    and ``type_parameters`` the arguments. Unions are stored with
    ``type=typing.Union``.
    """

    type: Any
    type_parameters: tuple["TypeData", ...] = ()

    @classmethod
    def of(cls, annotation: Any) -> "TypeData":
        """Build type data from a type annotation."""
        annotation, _ = split_annotated(annotation)

        if annotation is None:
            return cls(types.NoneType)

        origin = get_origin(annotation)
        if origin is None:
            return cls(annotation)

        if origin is types.UnionType:
            origin = Union
        return cls(origin, tuple(cls.of(arg) for arg in get_args(annotation)))

    @property
    def is_union(self) -> bool:
        return self.type is Union

    def is_assignable_from(self, other: Any) -> bool:
        """Check that a value of type ``other`` can be stored in this type.

        Only raw types are compared; type parameters are not checked.
        """
        source = other if isinstance(other, TypeData) else TypeData.of(other)

        if self.type is Any or source.type is Any:
            return True

        if source.is_union:
            return all(self.is_assignable_from(member) for member in source.type_parameters)

        if self.is_union:
            return any(member.is_assignable_from(source) for member in self.type_parameters)

        if source.type in _NUMERIC_PROMOTIONS.get(self.type, ()):
            return True

        if isinstance(self.type, type) and isinstance(source.type, type):
            return issubclass(source.type, self.type)

        return self.type == source.type

    def __str__(self) -> str:
        return describe_type(self)


def describe_type(value: Any) -> str:
    """Human readable name of a type or type data, used in error messages."""
    if isinstance(value, TypeData):
        if value.type is Any:
            return "Any"
        if value.is_union:
            return " | ".join(describe_type(member) for member in value.type_parameters)
        name = describe_type(value.type)
        if value.type_parameters:
            params = ", ".join(describe_type(param) for param in value.type_parameters)
            return f"{name}[{params}]"
        return name
    if value is Any:
        return "Any"
    if isinstance(value, type):
        if value.__module__ == "builtins":
            return value.__qualname__
        return f"{value.__module__}.{value.__qualname__}"
    return repr(value)
