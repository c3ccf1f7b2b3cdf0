"""Populate class model builders from Python classes.

Properties are taken from resolved class annotations (dataclass fields and
plain annotated attributes) and from ``property`` objects. Markers come from
``typing.Annotated`` metadata, the ``discriminator``/``creator`` decorators
and, optionally, a ``MarkerOverlay`` declared outside the class.
"""

import dataclasses
import inspect
import logging
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, field
from typing import Any, ClassVar, Self, TypeVar, get_origin, get_type_hints

from .builders import ClassModel, ClassModelBuilder, PropertyAccessor, PropertyModelBuilder
from .conventions import Convention
from .creator import CreatorExecutable, CreatorKind, CreatorParameter
from .errors import ConfigurationError
from .markers import Creator, Marker, function_markers, split_annotated, type_markers
from .type_data import TypeData

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class MarkerOverlay:
    """Markers declared for a class outside of its source.

    ``read_markers``/``write_markers`` are keyed by property name,
    ``parameter_markers`` by creator parameter name. ``creator`` names the
    attribute (``__init__`` or a static/class method) used as the creator.
    Overlay markers take precedence over the ones found on the class.
    """

    type_markers: list[Marker] = field(default_factory=list)
    read_markers: dict[str, list[Marker]] = field(default_factory=dict)
    write_markers: dict[str, list[Marker]] = field(default_factory=dict)
    creator: str | None = None
    parameter_markers: dict[str, list[Marker]] = field(default_factory=dict)


def _type_hints(obj: Any, owner: type) -> dict[str, Any]:
    try:
        return get_type_hints(obj, localns={owner.__name__: owner}, include_extras=True)
    except NameError as exc:
        raise ConfigurationError(
            f"Cannot resolve type hints of {owner.__qualname__}: {exc}"
        ) from exc


def _split(annotation: Any, owner: type) -> tuple[TypeData, list[Marker]]:
    base, markers = split_annotated(annotation)
    if base is Self:
        base = owner
    return TypeData.of(base), markers


def _is_field_annotation(name: str, annotation: Any) -> bool:
    if name.startswith("_"):
        return False
    base, _ = split_annotated(annotation)
    if base is ClassVar or get_origin(base) is ClassVar:
        return False
    return not isinstance(base, dataclasses.InitVar)


def _class_properties(cls: type) -> dict[str, property]:
    found: dict[str, property] = {}
    for klass in reversed(cls.__mro__):
        for name, value in vars(klass).items():
            if isinstance(value, property) and not name.startswith("_"):
                found[name] = value
    return found


def _accessor_markers(
    prop: property, owner: type
) -> tuple[TypeData | None, list[Marker], list[Marker]]:
    type_data: TypeData | None = None
    read_markers: list[Marker] = []
    write_markers: list[Marker] = []

    if prop.fget is not None:
        returns = _type_hints(prop.fget, owner).get("return")
        if returns is not None:
            type_data, read_markers = _split(returns, owner)

    if prop.fset is not None:
        hints = _type_hints(prop.fset, owner)
        params = list(inspect.signature(prop.fset).parameters)
        if len(params) > 1 and params[1] in hints:
            setter_type, write_markers = _split(hints[params[1]], owner)
            type_data = type_data or setter_type

    return type_data, read_markers, write_markers


def _iter_properties(cls: type) -> Iterator[PropertyModelBuilder]:
    builders: dict[str, PropertyModelBuilder] = {}

    for name, annotation in _type_hints(cls, cls).items():
        if not _is_field_annotation(name, annotation):
            continue
        type_data, markers = _split(annotation, cls)
        builder = PropertyModelBuilder.create(name, type_data)
        builder.read_markers.extend(markers)
        builder.write_markers.extend(markers)
        builder.accessor = PropertyAccessor(name)
        builders[name] = builder

    for name, prop in _class_properties(cls).items():
        type_data, read_markers, write_markers = _accessor_markers(prop, cls)
        builder = builders.get(name)
        if builder is None:
            builder = PropertyModelBuilder.create(
                name,
                type_data or TypeData(Any),
                readable=prop.fget is not None,
                writable=prop.fset is not None,
            )
            builder.accessor = PropertyAccessor(name)
            builders[name] = builder
        builder.read_markers.extend(read_markers)
        builder.write_markers.extend(write_markers)

    yield from builders.values()


def _parameters(
    func: Callable[..., Any], owner: type, skip_first: bool, overlay: MarkerOverlay | None
) -> tuple[CreatorParameter, ...]:
    hints = _type_hints(func, owner)
    signature = inspect.signature(func)
    parameters: list[CreatorParameter] = []

    for index, (name, parameter) in enumerate(signature.parameters.items()):
        if skip_first and index == 0:
            continue
        if parameter.kind in (parameter.VAR_POSITIONAL, parameter.VAR_KEYWORD):
            continue
        type_data, markers = _split(hints.get(name, Any), owner)
        if overlay is not None:
            markers = [*overlay.parameter_markers.get(name, ()), *markers]
        parameters.append(
            CreatorParameter(
                name=name,
                type_data=type_data,
                markers=tuple(markers),
                keyword_only=parameter.kind is parameter.KEYWORD_ONLY,
            )
        )
    return tuple(parameters)


def _creator(
    cls: type[T],
    name: str,
    func: Callable[..., Any],
    kind: CreatorKind,
    markers: list[Marker],
    overlay: MarkerOverlay | None,
) -> CreatorExecutable[T]:
    if kind == "constructor":
        executable: Callable[..., T] = cls
        skip_first = True
        return_type = None
    else:
        executable = getattr(cls, name)
        skip_first = isinstance(cls.__dict__[name], classmethod)
        returns = _type_hints(func, cls).get("return")
        return_type = _split(returns, cls)[0] if returns is not None else None

    return CreatorExecutable(
        type=cls,
        executable=executable,
        kind=kind,
        markers=tuple(markers),
        parameters=_parameters(func, cls, skip_first, overlay),
        return_type=return_type,
        name=name,
    )


def _iter_creator_candidates(
    cls: type[T], overlay: MarkerOverlay | None
) -> Iterator[CreatorExecutable[T]]:
    """Yield constructors and factories of ``cls`` that carry a creator marker."""
    overlay_creator = overlay.creator if overlay is not None else None

    for name, value in vars(cls).items():
        if name == "__init__" and callable(value):
            func, kind = value, "constructor"
        elif isinstance(value, (staticmethod, classmethod)) and not name.startswith("__"):
            func, kind = value.__func__, "factory"
        else:
            continue

        markers = function_markers(value)
        if name == overlay_creator:
            markers.append(Creator())
        if not any(isinstance(marker, Creator) for marker in markers):
            continue

        yield _creator(cls, name, func, kind, markers, overlay)


def create_class_model_builder(
    cls: type[T],
    overlay: MarkerOverlay | None = None,
    conventions: Iterable[Convention] | None = None,
) -> ClassModelBuilder[T]:
    """Create a builder for ``cls`` holding its properties, markers and creators."""
    builder = ClassModelBuilder(cls, conventions)
    builder.markers.extend(type_markers(cls))
    if overlay is not None:
        builder.markers.extend(overlay.type_markers)

    for property_builder in _iter_properties(cls):
        if overlay is not None:
            name = property_builder.name
            property_builder.read_markers.extend(overlay.read_markers.get(name, ()))
            property_builder.write_markers.extend(overlay.write_markers.get(name, ()))
        builder.add_property(property_builder)

    builder.creator_candidates.extend(_iter_creator_candidates(cls, overlay))

    logger.debug(
        "Introspected %s: %d properties, %d creator candidates",
        cls.__qualname__,
        len(builder.property_model_builders),
        len(builder.creator_candidates),
    )
    return builder


def build_class_model(
    cls: type[T],
    overlay: MarkerOverlay | None = None,
    conventions: Iterable[Convention] | None = None,
) -> ClassModel[T]:
    """Introspect ``cls`` and build its class model.

    Raises:
        ConfigurationError: if the class declaration is inconsistent.
    """
    return create_class_model_builder(cls, overlay, conventions).build()
