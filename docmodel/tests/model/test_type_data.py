"""Tests for type data and assignability."""

from typing import Annotated, Any, Optional

from docmodel.model import Property, TypeData


class Animal:
    pass


class Dog(Animal):
    pass


def describe_of():
    def keeps_plain_classes(expect):
        expect(TypeData.of(int)) == TypeData(int)

    def strips_annotated_metadata(expect):
        expect(TypeData.of(Annotated[str, Property("name")])) == TypeData(str)

    def splits_generic_aliases(expect):
        type_data = TypeData.of(dict[str, list[int]])

        expect(type_data.type) == dict
        expect(type_data.type_parameters) == (
            TypeData(str),
            TypeData(list, (TypeData(int),)),
        )

    def normalizes_unions(expect):
        expect(TypeData.of(int | None)) == TypeData.of(Optional[int])
        expect(TypeData.of(int | None).is_union) == True


def describe_is_assignable_from():
    def accepts_same_class(expect):
        expect(TypeData(str).is_assignable_from(str)) == True

    def accepts_subclasses(expect):
        expect(TypeData(Animal).is_assignable_from(Dog)) == True
        expect(TypeData(Dog).is_assignable_from(Animal)) == False

    def rejects_unrelated_classes(expect):
        expect(TypeData(str).is_assignable_from(int)) == False

    def applies_numeric_promotion(expect):
        expect(TypeData(float).is_assignable_from(int)) == True
        expect(TypeData(complex).is_assignable_from(float)) == True
        expect(TypeData(int).is_assignable_from(float)) == False

    def accepts_anything_for_any(expect):
        expect(TypeData(Any).is_assignable_from(int)) == True
        expect(TypeData(int).is_assignable_from(Any)) == True

    def compares_raw_types_only(expect):
        expect(TypeData.of(list[str]).is_assignable_from(list[int])) == True

    def accepts_union_members(expect):
        optional = TypeData.of(Optional[Animal])

        expect(optional.is_assignable_from(Dog)) == True
        expect(optional.is_assignable_from(None)) == True
        expect(optional.is_assignable_from(str)) == False

    def requires_every_member_of_a_union_source(expect):
        expect(TypeData(float).is_assignable_from(int | float)) == True
        expect(TypeData(int).is_assignable_from(int | str)) == False


def describe_str():
    def describes_generics_and_unions(expect):
        expect(str(TypeData.of(dict[str, int]))) == "dict[str, int]"
        expect(str(TypeData.of(int | None))) == "int | NoneType"
