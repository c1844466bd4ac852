import pytest
import strawberry

from trainingdemo.content_management.item import ContentPart
from trainingdemo.content_management.shell import Shell
from trainingdemo.exceptions import ConfigurationError
from trainingdemo.graphql import SchemaRegistrar
from trainingdemo.person.graphql import (
    PersonPartIndexAliasProvider,
    PersonPartObject,
    PersonPartWhereInput,
    register_person_graphql,
)
from trainingdemo.person.models import PersonPart
from trainingdemo.person.startup import STARTUPS

pytestmark = pytest.mark.graphql


def test_registering_twice_is_idempotent():
    registrar = SchemaRegistrar()
    register_person_graphql(registrar)
    register_person_graphql(registrar)

    assert len(registrar.registrations) == 1
    registration = registrar.registrations[0]
    assert len(registration.alias_providers) == 1

    sdl = registrar.build_schema().as_str()
    assert sdl.count("type PersonPart ") == 1
    assert sdl.count("input PersonPartWhereInput ") == 1


def test_same_descriptor_after_build_is_still_a_no_op():
    registrar = SchemaRegistrar()
    register_person_graphql(registrar)
    registrar.build_schema()

    register_person_graphql(registrar)

    assert len(registrar.registrations) == 1


def test_new_registration_after_build_is_rejected():
    class BookPart(ContentPart):
        title: str = ""

    @strawberry.type(name="BookPart")
    class BookPartObject:
        title: str

        @classmethod
        def from_part(cls, content_item_id, part):
            return cls(title=part.title)

    registrar = SchemaRegistrar()
    register_person_graphql(registrar)
    registrar.build_schema()

    with pytest.raises(ConfigurationError, match="already built"):
        registrar.add_object_graph_type(BookPart, BookPartObject)


def test_conflicting_object_type_is_rejected():
    @strawberry.type
    class AnotherPersonObject:
        name: str

        @classmethod
        def from_part(cls, content_item_id, part):
            return cls(name=part.name)

    registrar = SchemaRegistrar()
    registrar.add_object_graph_type(PersonPart, PersonPartObject)

    with pytest.raises(ConfigurationError):
        registrar.add_object_graph_type(PersonPart, AnotherPersonObject)


def test_structurally_invalid_descriptors_are_rejected():
    registrar = SchemaRegistrar()
    with pytest.raises(ConfigurationError):
        registrar.add_object_graph_type(PersonPart, PersonPartWhereInput)
    with pytest.raises(ConfigurationError):
        registrar.add_input_object_graph_type(PersonPart, PersonPartObject)


def test_incomplete_registration_fails_at_build():
    registrar = SchemaRegistrar()
    registrar.add_object_graph_type(PersonPart, PersonPartObject)
    registrar.add_index_alias_provider(PersonPart, PersonPartIndexAliasProvider())

    with pytest.raises(ConfigurationError, match="where input type"):
        registrar.build_schema()


def test_graphql_startup_is_skipped_without_feature():
    shell = Shell(enabled_features=()).run_startups(STARTUPS)

    assert shell.registrar.registrations == []
    assert [type(d).__name__ for d in shell.drivers] == ["PersonPartDisplayDriver"]


def test_graphql_startup_runs_with_feature():
    shell = Shell(enabled_features={"graphql"}).run_startups(STARTUPS)

    assert shell.registrar.is_registered(PersonPart)
