"""Type definitions for parsed marker manifests."""

from dataclasses import dataclass
from typing import Any

from dataclasses_json import DataClassJsonMixin


@dataclass
class ManifestMarkerArg(DataClassJsonMixin):
    """Represents an argument to a marker.

    Positional arguments have ``name=None``.
    """

    name: str | None
    value: Any


@dataclass
class ManifestMarker(DataClassJsonMixin):
    """Represents a marker such as ``@property("full_name")``."""

    name: str
    arguments: list[ManifestMarkerArg]

    def argument(self, name: str, position: int | None = None, default: Any = None) -> Any:
        """Look up an argument by name, or by position among positional arguments."""
        for arg in self.arguments:
            if arg.name == name:
                return arg.value
        if position is not None:
            positional = [arg for arg in self.arguments if arg.name is None]
            if position < len(positional):
                return positional[position].value
        return default


@dataclass
class ManifestMember(DataClassJsonMixin):
    """Represents markers declared for one property of a model."""

    name: str
    markers: list[ManifestMarker]


@dataclass
class ManifestParameter(DataClassJsonMixin):
    """Represents markers declared for one creator parameter."""

    name: str
    markers: list[ManifestMarker]


@dataclass
class ManifestCreator(DataClassJsonMixin):
    """Represents the creator declaration of a model."""

    name: str
    markers: list[ManifestMarker]
    parameters: list[ManifestParameter]


@dataclass
class ManifestModel(DataClassJsonMixin):
    """Represents the markers declared for one class.

    ``target`` is the import path of the class, ``module:QualName``.
    """

    target: str
    markers: list[ManifestMarker]
    members: list[ManifestMember]
    creators: list[ManifestCreator]

    @property
    def creator(self) -> ManifestCreator | None:
        return self.creators[0] if self.creators else None


@dataclass
class Manifest(DataClassJsonMixin):
    """Represents a complete manifest file."""

    models: list[ManifestModel]


SIDES = frozenset(["read", "write", "both"])

MODEL_MARKERS = frozenset(["discriminator"])
MEMBER_MARKERS = frozenset(["property", "id", "ignore"])
PARAMETER_MARKERS = frozenset(["property", "id"])
