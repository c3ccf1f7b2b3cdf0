"""Declarative markers for class models.

Markers are the Python counterpart of declared annotations. They are attached
to class annotations, property accessors and creator parameters through
``typing.Annotated``, and to classes and creator functions through the
``discriminator`` and ``creator`` decorators.

Example:
    @discriminator(key="_t", value="person")
    @dataclass
    class Person:
        id: Annotated[str, Id()]
        name: Annotated[str, Property("full_name")]
        password: Annotated[str, Ignore()] = ""

        @creator
        @classmethod
        def create(
            cls,
            id: Annotated[str, Id()],
            name: Annotated[str, Property("full_name")],
        ) -> "Person":
            return cls(id, name)
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Annotated, Any, TypeVar, get_origin

TYPE_MARKERS_ATTR = "__docmodel_markers__"
CREATOR_MARKERS_ATTR = "__docmodel_creator__"


@dataclass(frozen=True, slots=True)
class Marker:
    """Base class for every docmodel marker."""


@dataclass(frozen=True, slots=True)
class Discriminator(Marker):
    """Enables discriminator values for a type.

    Empty ``key`` or ``value`` keep the defaults of the class model builder.
    """

    key: str = ""
    value: str = ""


@dataclass(frozen=True, slots=True)
class Property(Marker):
    """Names a serialized property or a creator parameter."""

    value: str = ""
    use_discriminator: bool = False


@dataclass(frozen=True, slots=True)
class Id(Marker):
    """Marks the identifier property."""


@dataclass(frozen=True, slots=True)
class Ignore(Marker):
    """Disables the side of a property it is attached to."""


@dataclass(frozen=True, slots=True)
class Creator(Marker):
    """Marks the constructor or factory used to instantiate a type."""


TClass = TypeVar("TClass", bound=type)


def discriminator(
    cls: TClass | None = None, *, key: str = "", value: str = ""
) -> TClass | Callable[[TClass], TClass]:
    """Attach a ``Discriminator`` marker to a class.

    Usable bare (``@discriminator``) or with arguments
    (``@discriminator(key="_t", value="person")``).
    """

    def wrap(target: TClass) -> TClass:
        markers = list(target.__dict__.get(TYPE_MARKERS_ATTR, ()))
        markers.append(Discriminator(key=key, value=value))
        setattr(target, TYPE_MARKERS_ATTR, tuple(markers))
        return target

    if cls is None:
        return wrap
    return wrap(cls)


def creator(func: Any) -> Any:
    """Mark ``__init__`` or a static/class method as the creator of its class."""
    target = func.__func__ if isinstance(func, (staticmethod, classmethod)) else func
    markers = getattr(target, CREATOR_MARKERS_ATTR, ())
    setattr(target, CREATOR_MARKERS_ATTR, (*markers, Creator()))
    return func


def type_markers(cls: type) -> list[Marker]:
    """Return markers declared directly on ``cls`` (not inherited)."""
    return list(cls.__dict__.get(TYPE_MARKERS_ATTR, ()))


def function_markers(func: Any) -> list[Marker]:
    """Return markers attached to a function by decorators."""
    target = func.__func__ if isinstance(func, (staticmethod, classmethod)) else func
    return list(getattr(target, CREATOR_MARKERS_ATTR, ()))


def split_annotated(annotation: Any) -> tuple[Any, list[Marker]]:
    """Split an annotation into its base type and the markers it carries."""
    if get_origin(annotation) is not Annotated:
        return annotation, []
    markers = [m for m in annotation.__metadata__ if isinstance(m, Marker)]
    return annotation.__origin__, markers
