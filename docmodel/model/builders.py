"""Mutable builders and the frozen class models they produce."""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from .creator import CreatorExecutable, InstanceCreatorFactory
from .errors import ConfigurationError
from .markers import Marker
from .type_data import TypeData

if TYPE_CHECKING:
    from .conventions import Convention

logger = logging.getLogger(__name__)

T = TypeVar("T")

ID_PROPERTY_NAME = "_id"


@dataclass(frozen=True, slots=True)
class PropertyAccessor:
    """Reads and writes a property on an instance by its internal name."""

    name: str

    def get(self, instance: Any) -> Any:
        return getattr(instance, self.name)

    def set(self, instance: Any, value: Any) -> None:
        setattr(instance, self.name, value)


@dataclass(frozen=True)
class PropertyModel:
    """Resolved description of one serialized property."""

    name: str
    read_name: str | None
    write_name: str | None
    type_data: TypeData
    discriminator_enabled: bool | None
    accessor: PropertyAccessor
    id_property: bool = False

    @property
    def readable(self) -> bool:
        return self.read_name is not None

    @property
    def writable(self) -> bool:
        return self.write_name is not None

    @property
    def use_discriminator(self) -> bool:
        return bool(self.discriminator_enabled)


@dataclass
class PropertyModelBuilder:
    """Accumulates the configuration of one candidate property.

    Read-side markers come from fields and getters, write-side markers from
    fields, setters and creator parameters. Setting ``read_name`` or
    ``write_name`` to None disables that side.
    """

    name: str
    type_data: TypeData
    read_name: str | None = None
    write_name: str | None = None
    discriminator_enabled: bool | None = None
    read_markers: list[Marker] = field(default_factory=list)
    write_markers: list[Marker] = field(default_factory=list)
    accessor: PropertyAccessor | None = None

    @classmethod
    def create(
        cls,
        name: str,
        type_data: TypeData,
        *,
        readable: bool = True,
        writable: bool = True,
    ) -> PropertyModelBuilder:
        """Create a builder whose external names default to ``name``."""
        return cls(
            name=name,
            type_data=type_data,
            read_name=name if readable else None,
            write_name=name if writable else None,
        )

    @property
    def readable(self) -> bool:
        return self.read_name is not None

    @property
    def writable(self) -> bool:
        return self.write_name is not None

    def build(self, *, id_property: bool = False) -> PropertyModel:
        return PropertyModel(
            name=self.name,
            read_name=self.read_name,
            write_name=self.write_name,
            type_data=self.type_data,
            discriminator_enabled=self.discriminator_enabled,
            accessor=self.accessor or PropertyAccessor(self.name),
            id_property=id_property,
        )


@dataclass(frozen=True)
class ClassModel(Generic[T]):
    """Immutable description of how a type maps to a document."""

    type: type[T]
    name: str
    properties: tuple[PropertyModel, ...]
    instance_creator_factory: InstanceCreatorFactory[T]
    id_property: PropertyModel | None = None
    discriminator_enabled: bool = False
    discriminator_key: str | None = None
    discriminator: str | None = None

    def get_property(self, name: str) -> PropertyModel | None:
        """Look up a property by its internal name."""
        for property_model in self.properties:
            if property_model.name == name:
                return property_model
        return None

    @property
    def has_creator(self) -> bool:
        return self.instance_creator_factory.executable.is_creator


class ClassModelBuilder(Generic[T]):
    """Accumulates the configuration of one type before it is frozen.

    Introspection fills in the type-level markers, the candidate properties
    and the creator candidates; conventions then rewrite the builder in
    order, and ``build`` validates it into a ``ClassModel``.
    """

    def __init__(self, type_: type[T], conventions: Iterable[Convention] | None = None) -> None:
        if conventions is None:
            from .conventions import DEFAULT_CONVENTIONS

            conventions = DEFAULT_CONVENTIONS

        self.type = type_
        self.markers: list[Marker] = []
        self.conventions: list[Convention] = list(conventions)
        self.creator_candidates: list[CreatorExecutable[T]] = []
        self.id_property_name: str | None = None
        self.discriminator_enabled = False
        self.discriminator_key: str | None = None
        self.discriminator: str | None = None
        self.instance_creator_factory: InstanceCreatorFactory[T] | None = None
        self._properties: dict[str, PropertyModelBuilder] = {}

    @property
    def property_model_builders(self) -> list[PropertyModelBuilder]:
        """Snapshot of the property builders in declaration order."""
        return list(self._properties.values())

    def add_property(self, builder: PropertyModelBuilder) -> PropertyModelBuilder:
        self._properties[builder.name] = builder
        return builder

    def get_property(self, name: str | None) -> PropertyModelBuilder | None:
        if name is None:
            return None
        return self._properties.get(name)

    def remove_property(self, name: str) -> bool:
        return self._properties.pop(name, None) is not None

    def build(self) -> ClassModel[T]:
        """Apply the conventions and freeze the builder into a class model."""
        for convention in self.conventions:
            convention.apply(self)

        self._validate()

        property_models: list[PropertyModel] = []
        id_property: PropertyModel | None = None
        for builder in self._properties.values():
            is_id = builder.name == self.id_property_name
            if is_id:
                if builder.readable:
                    builder.read_name = ID_PROPERTY_NAME
                if builder.writable:
                    builder.write_name = ID_PROPERTY_NAME
            model = builder.build(id_property=is_id)
            if is_id:
                id_property = model
            property_models.append(model)

        factory = self.instance_creator_factory
        if factory is None:
            factory = InstanceCreatorFactory(CreatorExecutable(self.type, self.type))

        logger.debug(
            "Built class model for %s with %d properties",
            self.type.__qualname__,
            len(property_models),
        )
        return ClassModel(
            type=self.type,
            name=self.type.__qualname__,
            properties=tuple(property_models),
            instance_creator_factory=factory,
            id_property=id_property,
            discriminator_enabled=self.discriminator_enabled,
            discriminator_key=self.discriminator_key,
            discriminator=self.discriminator,
        )

    def _validate(self) -> None:
        read_names = Counter(b.read_name for b in self._properties.values() if b.readable)
        write_names = Counter(b.write_name for b in self._properties.values() if b.writable)
        for names in (read_names, write_names):
            for name, count in names.items():
                if count > 1:
                    raise ConfigurationError(
                        f"Duplicate property named '{name}' found in {self.type.__qualname__}."
                    )

        if self.id_property_name is not None and self.id_property_name not in self._properties:
            raise ConfigurationError(
                f"Invalid id property, property named '{self.id_property_name}' can not be found "
                f"in {self.type.__qualname__}."
            )
