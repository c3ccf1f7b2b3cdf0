"""Conventions applied to a class model builder before it is built."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Protocol

from .resolver import AnnotationConvention

if TYPE_CHECKING:
    from .builders import ClassModelBuilder

logger = logging.getLogger(__name__)

DEFAULT_DISCRIMINATOR_KEY = "_t"

ID_PROPERTY_CANDIDATES = ("_id", "id")


class Convention(Protocol):
    """A rewrite step run over a class model builder."""

    def apply(self, builder: ClassModelBuilder[Any]) -> None: ...


class DefaultsConvention:
    """Fills in discriminator defaults and the conventional identifier property."""

    def apply(self, builder: ClassModelBuilder[Any]) -> None:
        if builder.discriminator_key is None:
            builder.discriminator_key = DEFAULT_DISCRIMINATOR_KEY

        if builder.discriminator is None:
            builder.discriminator = f"{builder.type.__module__}.{builder.type.__qualname__}"

        if builder.id_property_name is None:
            for property_builder in builder.property_model_builders:
                if property_builder.name in ID_PROPERTY_CANDIDATES:
                    builder.id_property_name = property_builder.name
                    logger.debug(
                        "Using %r as the id property of %s",
                        property_builder.name,
                        builder.type.__qualname__,
                    )
                    break


ANNOTATION_CONVENTION = AnnotationConvention()
DEFAULTS_CONVENTION = DefaultsConvention()

DEFAULT_CONVENTIONS: tuple[Convention, ...] = (DEFAULTS_CONVENTION, ANNOTATION_CONVENTION)
