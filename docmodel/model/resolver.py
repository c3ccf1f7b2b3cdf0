"""Marker-driven resolution of a class model builder.

``AnnotationConvention`` turns the markers collected by introspection into a
consistent builder state. It runs four passes in a fixed order, each relying
on the state left by the previous one:

1. type-level markers (discriminator settings),
2. property-level markers (external names, identifier, ignored sides),
3. creator discovery and creator-parameter binding,
4. removal of properties that ended up neither readable nor writable.

Every violation raises a ``ConfigurationError``; the builder must then be
discarded. The convention mutates the builder and is meant to run once.
"""

from __future__ import annotations

import logging
from typing import Any, TypeVar

from .builders import ClassModelBuilder, PropertyModelBuilder
from .creator import CreatorExecutable, InstanceCreatorFactory
from .errors import (
    CreatorTypeMismatchError,
    IncompleteCreatorAnnotationError,
    InvalidCreatorError,
    MultipleCreatorsError,
)
from .markers import Discriminator, Id, Ignore, Marker, Property
from .type_data import TypeData, describe_type

logger = logging.getLogger(__name__)

T = TypeVar("T")


class AnnotationConvention:
    """Applies declared markers to a class model builder."""

    def apply(self, builder: ClassModelBuilder[Any]) -> None:
        for marker in builder.markers:
            self._process_class_marker(builder, marker)

        for property_builder in builder.property_model_builders:
            self._process_property_markers(builder, property_builder)

        self._process_creator(builder)

        self._clean_property_builders(builder)

    def _process_class_marker(self, builder: ClassModelBuilder[Any], marker: Marker) -> None:
        if not isinstance(marker, Discriminator):
            return

        if marker.key:
            builder.discriminator_key = marker.key
        if marker.value:
            builder.discriminator = marker.value
        builder.discriminator_enabled = True

    def _process_property_markers(
        self, builder: ClassModelBuilder[Any], property_builder: PropertyModelBuilder
    ) -> None:
        for marker in property_builder.read_markers:
            if isinstance(marker, Property):
                if marker.value:
                    property_builder.read_name = marker.value
                property_builder.discriminator_enabled = marker.use_discriminator
            elif isinstance(marker, Id):
                builder.id_property_name = property_builder.name

        for marker in property_builder.write_markers:
            if isinstance(marker, Property) and marker.value:
                property_builder.write_name = marker.value

        # Ignore disables a side whatever naming markers it carries
        if any(isinstance(marker, Ignore) for marker in property_builder.read_markers):
            property_builder.read_name = None
        if any(isinstance(marker, Ignore) for marker in property_builder.write_markers):
            property_builder.write_name = None

    def _find_creator(self, builder: ClassModelBuilder[T]) -> CreatorExecutable[T] | None:
        candidates = sorted(builder.creator_candidates, key=lambda c: c.is_factory)

        found: CreatorExecutable[T] | None = None
        for candidate in candidates:
            if not candidate.is_creator:
                continue
            if found is not None:
                raise MultipleCreatorsError(
                    "Found multiple constructors / methods annotated with @creator "
                    f"in {builder.type.__qualname__}"
                )
            if candidate.is_factory and candidate.return_type is not None:
                if not TypeData(builder.type).is_assignable_from(candidate.return_type):
                    raise InvalidCreatorError(
                        "Invalid method annotated with @creator. "
                        f"Returns '{describe_type(candidate.return_type)}', "
                        f"expected {describe_type(builder.type)}"
                    )
            found = candidate
        return found

    def _process_creator(self, builder: ClassModelBuilder[T]) -> None:
        creator = self._find_creator(builder)
        if creator is None:
            return

        properties = creator.properties
        parameter_types = creator.parameter_types
        if len(properties) != len(parameter_types):
            raise creator.error(
                f"All parameters must be annotated with a @property in {builder.type.__qualname__}",
                IncompleteCreatorAnnotationError,
            )

        bindings: list[str] = []
        for index, parameter_type in enumerate(parameter_types):
            if index == creator.id_property_index:
                property_builder = builder.get_property(builder.id_property_name)
                if property_builder is None:
                    raise creator.error(
                        f"Parameter {index} is marked @id but {builder.type.__qualname__} "
                        "has no id property",
                    )
            else:
                property_builder = self._bind_parameter(
                    builder, creator.property_name(index), parameter_type
                )

            if not property_builder.type_data.is_assignable_from(parameter_type):
                raise creator.error(
                    f"Invalid Property type for '{property_builder.write_name}'. "
                    f"Expected {describe_type(property_builder.type_data)}, "
                    f"found {describe_type(parameter_type)}.",
                    CreatorTypeMismatchError,
                )
            bindings.append(property_builder.name)

        builder.instance_creator_factory = InstanceCreatorFactory(creator, tuple(bindings))
        logger.debug(
            "Bound %s creator %s(%s) of %s",
            creator.kind,
            creator.name,
            ", ".join(bindings),
            builder.type.__qualname__,
        )

    def _bind_parameter(
        self, builder: ClassModelBuilder[Any], name: str, parameter_type: TypeData
    ) -> PropertyModelBuilder:
        property_builder: PropertyModelBuilder | None = None

        for candidate in builder.property_model_builders:
            if name == candidate.write_name:
                # A write name match wins outright
                property_builder = candidate
                break

            if name == candidate.read_name:
                # Keep looking, a later property may match the write name
                property_builder = candidate

        if property_builder is None:
            # Parameter markers may name the internal property instead of the document key
            property_builder = builder.get_property(name)

        if property_builder is None:
            return self._add_creator_property(builder, name, parameter_type)

        property_builder.write_name = name
        return property_builder

    def _add_creator_property(
        self, builder: ClassModelBuilder[Any], name: str, parameter_type: TypeData
    ) -> PropertyModelBuilder:
        property_builder = PropertyModelBuilder.create(name, parameter_type, readable=False)
        logger.debug("Added creator property %r to %s", name, builder.type.__qualname__)
        return builder.add_property(property_builder)

    def _clean_property_builders(self, builder: ClassModelBuilder[Any]) -> None:
        unused = [
            p.name for p in builder.property_model_builders if not p.readable and not p.writable
        ]
        for name in unused:
            builder.remove_property(name)
        if unused:
            logger.debug("Removed unused properties %s from %s", unused, builder.type.__qualname__)


def resolve(builder: ClassModelBuilder[T]) -> ClassModelBuilder[T]:
    """Resolve the markers of ``builder`` in place and return it.

    Raises:
        ConfigurationError: if the declared markers are ambiguous or inconsistent.
    """
    AnnotationConvention().apply(builder)
    return builder
