"""Marker manifests: explicit marker declarations parsed from text."""

from .overlay import load_manifest as load_manifest
from .overlay import load_overlays as load_overlays
from .overlay import resolve_target as resolve_target
from .parser import ValidationError as ValidationError
from .parser import parse as parse
from .types import MEMBER_MARKERS as MEMBER_MARKERS
from .types import MODEL_MARKERS as MODEL_MARKERS
from .types import PARAMETER_MARKERS as PARAMETER_MARKERS
from .types import SIDES as SIDES
from .types import Manifest as Manifest
from .types import ManifestCreator as ManifestCreator
from .types import ManifestMarker as ManifestMarker
from .types import ManifestMarkerArg as ManifestMarkerArg
from .types import ManifestMember as ManifestMember
from .types import ManifestModel as ManifestModel
from .types import ManifestParameter as ManifestParameter
