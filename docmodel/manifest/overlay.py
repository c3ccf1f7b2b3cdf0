"""Turn parsed manifests into marker overlays for introspection."""

import importlib
import inspect
from pathlib import Path

from docmodel.model.introspection import MarkerOverlay
from docmodel.model.markers import Discriminator, Id, Ignore, Marker, Property

from .parser import ValidationError, parse
from .types import Manifest, ManifestMarker, ManifestModel


def _to_marker(marker: ManifestMarker) -> Marker:
    if marker.name == "discriminator":
        return Discriminator(
            key=marker.argument("key", default=""),
            value=marker.argument("value", default=""),
        )
    if marker.name == "property":
        return Property(
            value=marker.argument("name", 0, ""),
            use_discriminator=bool(marker.argument("discriminator", default=False)),
        )
    if marker.name == "id":
        return Id()
    if marker.name == "ignore":
        return Ignore()
    raise ValidationError(f"Unknown marker @{marker.name}")


def resolve_target(target: str) -> type:
    """Import the class named by ``module:QualName``."""
    module_name, _, qualname = target.partition(":")
    try:
        obj: object = importlib.import_module(module_name)
    except ImportError as exc:
        raise ValidationError(f"Cannot import module for {target}: {exc}") from exc

    for part in qualname.split("."):
        if not hasattr(obj, part):
            raise ValidationError(f"{target} not found")
        obj = getattr(obj, part)

    if not isinstance(obj, type):
        raise ValidationError(f"{target} is not a class")
    return obj


def _has_member(cls: type, name: str) -> bool:
    for klass in cls.__mro__:
        if name in inspect.get_annotations(klass):
            return True
    return isinstance(inspect.getattr_static(cls, name, None), property)


def _creator_parameters(cls: type, name: str, target: str) -> list[str]:
    """Names of the parameters a creator receives, after ``self`` or ``cls``."""
    if name not in vars(cls):
        raise ValidationError(f"Creator {name} is not declared on {target}")

    value = vars(cls)[name]
    if name == "__init__" and callable(value):
        func, skip_first = value, True
    elif isinstance(value, (staticmethod, classmethod)) and not name.startswith("__"):
        func, skip_first = value.__func__, isinstance(value, classmethod)
    else:
        raise ValidationError(
            f"Creator {name} of {target} must be __init__, a staticmethod or a classmethod"
        )

    names = list(inspect.signature(func).parameters)
    return names[1:] if skip_first else names


def to_overlay(model: ManifestModel, cls: type) -> MarkerOverlay:
    """Convert the markers declared for one model into an overlay for ``cls``."""
    overlay = MarkerOverlay(type_markers=[_to_marker(m) for m in model.markers])

    for member in model.members:
        if not _has_member(cls, member.name):
            raise ValidationError(f"{member.name} is not declared on {model.target}")

        for marker in member.markers:
            side = marker.argument("side", default="both")
            if marker.name == "id":
                side = "read"
            if side in ("read", "both"):
                overlay.read_markers.setdefault(member.name, []).append(_to_marker(marker))
            if side in ("write", "both"):
                overlay.write_markers.setdefault(member.name, []).append(_to_marker(marker))

    creator = model.creator
    if creator is not None:
        parameter_names = _creator_parameters(cls, creator.name, model.target)
        overlay.creator = creator.name
        for parameter in creator.parameters:
            if parameter.name not in parameter_names:
                raise ValidationError(
                    f"{creator.name} of {model.target} has no parameter named {parameter.name}"
                )
            overlay.parameter_markers[parameter.name] = [_to_marker(m) for m in parameter.markers]

    return overlay


def load_overlays(manifest: Manifest) -> dict[type, MarkerOverlay]:
    """Resolve every model of a manifest to its class and overlay."""
    overlays: dict[type, MarkerOverlay] = {}
    for model in manifest.models:
        cls = resolve_target(model.target)
        overlays[cls] = to_overlay(model, cls)
    return overlays


def load_manifest(path: str | Path) -> dict[type, MarkerOverlay]:
    """Parse a manifest file and resolve its overlays."""
    with open(path, encoding="utf-8") as f:
        return load_overlays(parse(f.read()))
