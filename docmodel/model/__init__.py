"""Class models: markers, builders, conventions and resolution."""

from .builders import ID_PROPERTY_NAME as ID_PROPERTY_NAME
from .builders import ClassModel as ClassModel
from .builders import ClassModelBuilder as ClassModelBuilder
from .builders import PropertyAccessor as PropertyAccessor
from .builders import PropertyModel as PropertyModel
from .builders import PropertyModelBuilder as PropertyModelBuilder
from .conventions import DEFAULT_CONVENTIONS as DEFAULT_CONVENTIONS
from .conventions import Convention as Convention
from .conventions import DefaultsConvention as DefaultsConvention
from .creator import CreatorExecutable as CreatorExecutable
from .creator import CreatorParameter as CreatorParameter
from .creator import InstanceCreator as InstanceCreator
from .creator import InstanceCreatorFactory as InstanceCreatorFactory
from .errors import ConfigurationError as ConfigurationError
from .errors import CreatorTypeMismatchError as CreatorTypeMismatchError
from .errors import IncompleteCreatorAnnotationError as IncompleteCreatorAnnotationError
from .errors import InvalidCreatorError as InvalidCreatorError
from .errors import MultipleCreatorsError as MultipleCreatorsError
from .introspection import MarkerOverlay as MarkerOverlay
from .introspection import build_class_model as build_class_model
from .introspection import create_class_model_builder as create_class_model_builder
from .markers import Creator as Creator
from .markers import Discriminator as Discriminator
from .markers import Id as Id
from .markers import Ignore as Ignore
from .markers import Marker as Marker
from .markers import Property as Property
from .markers import creator as creator
from .markers import discriminator as discriminator
from .resolver import AnnotationConvention as AnnotationConvention
from .resolver import resolve as resolve
from .type_data import TypeData as TypeData
