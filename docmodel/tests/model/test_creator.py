"""Tests for instance creators."""

from typing import Annotated

import pytest

from docmodel.model import ConfigurationError, Property, build_class_model, creator
from docmodel.tests.sample_models import Person, Point


def describe_instance_creator():
    def constructs_once_all_creator_arguments_are_set(expect):
        model = build_class_model(Person)
        instance_creator = model.instance_creator_factory.create()

        instance_creator.set(41, model.get_property("age"))
        instance_creator.set("Ada Lovelace", model.get_property("name"))
        instance_creator.set("p-1", model.get_property("id"))
        person = instance_creator.get_instance()

        expect(isinstance(person, Person)) == True
        expect(person.id) == "p-1"
        expect(person.name) == "Ada Lovelace"
        expect(person.age) == 41

    def sets_later_values_through_accessors(expect):
        model = build_class_model(Point)
        instance_creator = model.instance_creator_factory.create()

        instance_creator.set(1, model.get_property("x"))
        instance_creator.set(2, model.get_property("y"))
        instance_creator.set(5, model.get_property("x"))

        point = instance_creator.get_instance()
        expect((point.x, point.y)) == (5, 2)

    def fills_missing_arguments_with_none(expect):
        model = build_class_model(Point)
        instance_creator = model.instance_creator_factory.create()

        instance_creator.set(3, model.get_property("x"))
        point = instance_creator.get_instance()

        expect(point.x) == 3
        expect(point.y) == None

    def reports_missing_properties_when_construction_fails(expect):
        class Strict:
            value: int

            def __init__(self, value: Annotated[int, Property("value")]) -> None:
                if value is None:
                    raise ValueError("value is required")
                self.value = value

        creator(Strict.__init__)
        model = build_class_model(Strict)
        instance_creator = model.instance_creator_factory.create()

        with pytest.raises(ConfigurationError) as exc:
            instance_creator.get_instance()
        expect("Missing the following properties: ['value']" in str(exc.value)) == True

    def creates_independent_creators(expect):
        model = build_class_model(Point)
        first = model.instance_creator_factory.create()
        second = model.instance_creator_factory.create()

        first.set(1, model.get_property("x"))
        first.set(1, model.get_property("y"))

        expect(first.get_instance() is not second.get_instance()) == True
