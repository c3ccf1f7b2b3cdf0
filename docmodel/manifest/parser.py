"""Marker manifest parser using Lark."""

import ast
import os
from collections import Counter
from dataclasses import dataclass
from typing import Any, TypeVar

from lark import Lark
from lark.exceptions import UnexpectedInput
from lark.visitors import Transformer

from .types import (
    MEMBER_MARKERS,
    MODEL_MARKERS,
    PARAMETER_MARKERS,
    SIDES,
    Manifest,
    ManifestCreator,
    ManifestMarker,
    ManifestMarkerArg,
    ManifestMember,
    ManifestModel,
    ManifestParameter,
)

_g_parser: Lark | None = None


class ValidationError(RuntimeError):
    """Raised when manifest validation fails."""


@dataclass
class _Name:
    value: str


@dataclass
class _Target:
    value: str


TFilter = TypeVar("TFilter", bound=object)


def _filter(args: list[Any], class_type: type[TFilter]) -> list[TFilter]:
    return [v for v in args if isinstance(v, class_type)]


def _find_one(args: list[Any], class_type: type[object]) -> Any:
    filtered = _filter(args, class_type)
    if len(filtered) == 0:
        return None
    if len(filtered) > 1:
        raise RuntimeError(f"Found more than one {class_type}")

    if hasattr(filtered[0], "value"):
        return filtered[0].value
    return filtered[0]


TMany = TypeVar("TMany")


def _find_many(args: list[Any], class_type: type[TMany]) -> list[TMany]:
    return _filter(args, class_type)


class TreeTransformer(Transformer):
    """Transform parse tree into manifest types."""

    def start(self, args: list[Any]) -> Manifest:
        return Manifest(models=_find_many(args, ManifestModel))

    def model(self, args: list[Any]) -> ManifestModel:
        return ManifestModel(
            target=_find_one(args, _Target),
            markers=_find_many(args, ManifestMarker),
            members=_find_many(args, ManifestMember),
            creators=_find_many(args, ManifestCreator),
        )

    def member(self, args: list[Any]) -> ManifestMember:
        return ManifestMember(name=_find_one(args, _Name), markers=_find_many(args, ManifestMarker))

    def creator(self, args: list[Any]) -> ManifestCreator:
        return ManifestCreator(
            name=_find_one(args, _Name),
            markers=_find_many(args, ManifestMarker),
            parameters=_find_many(args, ManifestParameter),
        )

    def parameter(self, args: list[Any]) -> ManifestParameter:
        return ManifestParameter(
            name=_find_one(args, _Name), markers=_find_many(args, ManifestMarker)
        )

    def marker(self, args: list[Any]) -> ManifestMarker:
        return ManifestMarker(
            name=_find_one(args, _Name), arguments=_find_many(args, ManifestMarkerArg)
        )

    def named_argument(self, args: list[Any]) -> ManifestMarkerArg:
        return ManifestMarkerArg(name=args[0].value, value=args[1])

    def positional_argument(self, args: list[Any]) -> ManifestMarkerArg:
        return ManifestMarkerArg(name=None, value=args[0])

    def string(self, args: list[Any]) -> str:
        return ast.literal_eval(str(args[0]))

    def number(self, args: list[Any]) -> int | float:
        text = str(args[0])
        return float(text) if any(c in text for c in ".eE") else int(text)

    def true(self, args: list[Any]) -> bool:
        return True

    def false(self, args: list[Any]) -> bool:
        return False

    def name(self, args: list[Any]) -> _Name:
        return _Name(value=str(args[0]))

    def target(self, args: list[Any]) -> _Target:
        return _Target(value=str(args[0]))


def _validate_marker(marker: ManifestMarker, allowed: frozenset[str], where: str) -> None:
    if marker.name not in allowed:
        raise ValidationError(f"@{marker.name} is not allowed on {where}")

    side = marker.argument("side")
    if side is not None and side not in SIDES:
        raise ValidationError(f"@{marker.name} on {where} has invalid side '{side}'")

    if marker.name == "id" and marker.arguments:
        raise ValidationError(f"@id on {where} takes no arguments")


def validate(manifest: Manifest) -> None:
    """Validate a parsed manifest."""
    targets = Counter(model.target for model in manifest.models)
    for target, count in targets.items():
        if count > 1:
            raise ValidationError(f"{target} declared more than once")

    for model in manifest.models:
        for marker in model.markers:
            _validate_marker(marker, MODEL_MARKERS, f"model {model.target}")

        members = Counter(member.name for member in model.members)
        for name, count in members.items():
            if count > 1:
                raise ValidationError(f"{model.target}.{name} declared more than once")

        for member in model.members:
            for marker in member.markers:
                _validate_marker(marker, MEMBER_MARKERS, f"{model.target}.{member.name}")

        if len(model.creators) > 1:
            raise ValidationError(f"{model.target} declares more than one creator")

        for creator in model.creators:
            for marker in creator.markers:
                _validate_marker(marker, frozenset(), f"creator {model.target}.{creator.name}")
            for parameter in creator.parameters:
                where = f"parameter {parameter.name} of {model.target}.{creator.name}"
                for marker in parameter.markers:
                    _validate_marker(marker, PARAMETER_MARKERS, where)
                    if marker.name == "property" and marker.argument("side") is not None:
                        raise ValidationError(f"@property on {where} takes no side")


def parse(text: str) -> Manifest:
    """Parse a marker manifest."""
    global _g_parser

    if not _g_parser:
        with open(f"{os.path.dirname(__file__)}/manifest.lark", encoding="utf-8") as f:
            grammar = f.read()

        _g_parser = Lark(grammar)

    try:
        tree = _g_parser.parse(text)
    except UnexpectedInput as exc:
        raise ValidationError(f"Syntax error at line {exc.line}, column {exc.column}") from exc

    manifest = TreeTransformer().transform(tree)

    validate(manifest)

    return manifest
