"""Creator executables and the instance creators built on top of them."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Generic, Literal, TypeVar

from .errors import ConfigurationError
from .markers import Creator, Id, Marker, Property
from .type_data import TypeData

if TYPE_CHECKING:
    from .builders import PropertyModel

T = TypeVar("T")

CreatorKind = Literal["constructor", "factory"]


@dataclass(frozen=True)
class CreatorParameter:
    """One declared parameter of a creator candidate."""

    name: str
    type_data: TypeData
    markers: tuple[Marker, ...] = ()
    keyword_only: bool = False


@dataclass
class CreatorExecutable(Generic[T]):
    """A constructor or factory method that may instantiate ``type``.

    ``executable`` is called with the creator arguments in declaration order.
    For constructors it is the class itself, for factories the bound static
    or class method. ``return_type`` is None for unannotated factories.
    """

    type: type[T]
    executable: Callable[..., T]
    kind: CreatorKind = "constructor"
    markers: tuple[Marker, ...] = ()
    parameters: tuple[CreatorParameter, ...] = ()
    return_type: TypeData | None = None
    name: str = "__init__"
    properties: list[Property | None] = field(init=False, repr=False)
    id_property_index: int | None = field(init=False, default=None)

    def __post_init__(self) -> None:
        self.properties = []
        for index, parameter in enumerate(self.parameters):
            for marker in parameter.markers:
                if isinstance(marker, Property):
                    self.properties.append(marker)
                    break
                if isinstance(marker, Id):
                    self.properties.append(None)
                    self.id_property_index = index
                    break

    @property
    def is_creator(self) -> bool:
        return any(isinstance(marker, Creator) for marker in self.markers)

    @property
    def is_factory(self) -> bool:
        return self.kind == "factory"

    @property
    def parameter_types(self) -> list[TypeData]:
        return [parameter.type_data for parameter in self.parameters]

    def property_name(self, index: int) -> str:
        """External name a creator parameter is bound to.

        An empty ``Property`` marker falls back to the parameter's own name.
        """
        marker = self.properties[index]
        if marker is not None and marker.value:
            return marker.value
        return self.parameters[index].name

    def create(self, *args: Any) -> T:
        """Call the creator with arguments in parameter order."""
        positional: list[Any] = []
        keywords: dict[str, Any] = {}
        for parameter, value in zip(self.parameters, args, strict=True):
            if parameter.keyword_only:
                keywords[parameter.name] = value
            else:
                positional.append(value)
        return self.executable(*positional, **keywords)

    def error(
        self, message: str, error_type: type[ConfigurationError] = ConfigurationError
    ) -> ConfigurationError:
        kind = "method" if self.is_factory else "constructor"
        return error_type(f"Invalid @creator {kind} in {self.type.__qualname__}. {message}")


class InstanceCreator(Generic[T]):
    """Collects decoded property values and produces one instance.

    Values for creator-bound properties are held until every creator
    argument is known; other values are buffered and applied through the
    property accessors once the instance exists.
    """

    def __init__(self, executable: CreatorExecutable[T], bindings: Sequence[str]) -> None:
        self._executable = executable
        self._bindings = tuple(bindings)
        self._remaining = {name: index for index, name in enumerate(self._bindings)}
        self._args: list[Any] = [None] * len(self._bindings)
        self._pending: list[tuple[PropertyModel, Any]] = []
        self._instance: T | None = None
        self._constructed = False

        if not self._bindings:
            self._construct()

    def set(self, value: Any, property_model: PropertyModel) -> None:
        """Supply the decoded value of one property."""
        if self._constructed:
            property_model.accessor.set(self._instance, value)
            return

        index = self._remaining.pop(property_model.name, None)
        if index is None:
            self._pending.append((property_model, value))
        else:
            self._args[index] = value

        if not self._remaining:
            self._construct()

    def get_instance(self) -> T:
        """Return the instance, constructing it with None for missing arguments."""
        if not self._constructed:
            try:
                self._construct()
            except (TypeError, ValueError) as exc:
                missing = sorted(self._remaining)
                raise ConfigurationError(
                    f"Could not construct new instance of: {self._executable.type.__qualname__}. "
                    f"Missing the following properties: {missing}"
                ) from exc
        return self._instance  # type: ignore[return-value]

    def _construct(self) -> None:
        instance = self._executable.create(*self._args)
        self._instance = instance
        self._constructed = True
        for property_model, value in self._pending:
            property_model.accessor.set(instance, value)
        self._pending.clear()


@dataclass(frozen=True)
class InstanceCreatorFactory(Generic[T]):
    """Creates instance creators for a creator and its ordered property bindings.

    ``bindings`` holds the internal property name for each creator argument.
    """

    executable: CreatorExecutable[T]
    bindings: tuple[str, ...] = ()

    def create(self) -> InstanceCreator[T]:
        return InstanceCreator(self.executable, self.bindings)
