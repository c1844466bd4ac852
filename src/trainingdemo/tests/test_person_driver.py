from datetime import datetime, timedelta, timezone

import pytest

from trainingdemo.content_management.binding import UpdateModel
from trainingdemo.exceptions import ConfigurationError
from trainingdemo.person.drivers import PersonPartDisplayDriver
from trainingdemo.person.models import Handedness, PersonPart
from trainingdemo.person.view_models import PersonPartViewModel
from trainingdemo.tests.factories import NOW, edit_form


@pytest.fixture
def driver() -> PersonPartDisplayDriver:
    return PersonPartDisplayDriver(clock=lambda: NOW)


@pytest.fixture
def ada() -> PersonPart:
    return PersonPart(
        name="Ada",
        birth_date_utc=datetime(2000, 1, 1, tzinfo=timezone.utc),
        handedness=Handedness.right,
    )


def test_render_view_references_the_part_without_mutation(driver, ada):
    before = ada.model_copy(deep=True)

    shape = driver.render_view(ada)

    assert shape.shape_type == "PersonPart"
    assert shape.model is ada
    assert shape.location is None
    assert ada == before


def test_render_edit_maps_fields_and_back_reference(driver, ada):
    shape = driver.render_edit(ada)

    assert shape.shape_type == "PersonPart_Edit"
    assert shape.location == "Content:1"
    assert shape.prefix == "PersonPart"
    model = shape.model
    assert isinstance(model, PersonPartViewModel)
    assert model.person_part is ada
    assert (model.name, model.birth_date_utc, model.handedness) == (
        ada.name,
        ada.birth_date_utc,
        ada.handedness,
    )


def test_view_edit_update_round_trip_is_identity(driver, ada):
    original = ada.model_copy(deep=True)
    driver.render_view(ada)
    view_model = driver.render_edit(ada).model

    result = driver.update(ada, UpdateModel(edit_form(view_model)))

    assert result.succeeded
    assert result.descriptor.shape_type == "PersonPart_Edit"
    assert ada == original


def test_round_trip_keeps_padded_name(driver):
    padded = PersonPart(
        name=" Ada ",
        birth_date_utc=datetime(2000, 1, 1, tzinfo=timezone.utc),
        handedness=Handedness.left,
    )
    original = padded.model_copy(deep=True)

    result = driver.update(padded, UpdateModel(edit_form(driver.render_edit(padded).model)))

    assert result.succeeded
    assert padded == original
    assert padded.name == " Ada "


def test_valid_update_copies_fields(driver, ada):
    updater = UpdateModel(
        {
            "PersonPart.Name": "Grace",
            "PersonPart.BirthDateUtc": "1906-12-09T00:00:00Z",
            "PersonPart.Handedness": "Left",
        }
    )

    result = driver.update(ada, updater)

    assert result.succeeded
    assert ada.name == "Grace"
    assert ada.birth_date_utc == datetime(1906, 12, 9, tzinfo=timezone.utc)
    assert ada.handedness is Handedness.left
    assert result.descriptor.model.name == "Grace"


def test_empty_name_fails_and_leaves_part_unchanged(driver, ada):
    before = ada.model_copy(deep=True)
    form = edit_form(driver.render_edit(ada).model)
    form["PersonPart.Name"] = ""

    result = driver.update(ada, UpdateModel(form))

    assert not result.succeeded
    assert [e.field for e in result.errors] == ["name"]
    assert ada == before
    # The editor is re-rendered with the rejected input.
    assert result.descriptor.shape_type == "PersonPart_Edit"
    assert result.descriptor.model.name == ""
    assert result.descriptor.location == driver.render_edit(ada).location == "Content:1"
    assert result.descriptor.prefix == "PersonPart"
    assert result.descriptor.model.person_part is ada


def test_future_birth_date_and_empty_name_report_both(driver, ada):
    before = ada.model_copy(deep=True)
    updater = UpdateModel(
        {
            "PersonPart.Name": "",
            "PersonPart.BirthDateUtc": (NOW + timedelta(days=1)).isoformat(),
            "PersonPart.Handedness": "right",
        }
    )

    result = driver.update(ada, updater)

    assert {e.field for e in result.errors} == {"name", "birth_date_utc"}
    assert ada == before


def test_malformed_input_becomes_field_errors(driver, ada):
    before = ada.model_copy(deep=True)
    updater = UpdateModel(
        {
            "PersonPart.Name": "Ada",
            "PersonPart.BirthDateUtc": "not a date",
            "PersonPart.Handedness": "sideways",
        }
    )

    result = driver.update(ada, updater)

    assert sorted(e.field for e in result.errors) == ["birth_date_utc", "handedness"]
    # One error per field: the rule errors for unbound fields are not repeated.
    assert len(result.errors) == 2
    assert ada == before


def test_missing_fields_are_required(driver, ada):
    result = driver.update(ada, UpdateModel({}))

    assert {e.field for e in result.errors} == {"name", "birth_date_utc", "handedness"}


def test_back_reference_is_never_bound(driver, ada):
    form = edit_form(driver.render_edit(ada).model)
    form["PersonPart.PersonPart"] = {"name": "Mallory"}

    result = driver.update(ada, UpdateModel(form))

    assert result.succeeded
    assert ada.name == "Ada"


def test_custom_prefix_scopes_binding(ada):
    driver = PersonPartDisplayDriver(prefix="Author", clock=lambda: NOW)
    form = edit_form(driver.render_edit(ada).model, prefix="Author")
    form["PersonPart.Name"] = ""

    result = driver.update(ada, UpdateModel(form))

    assert result.succeeded
    assert result.descriptor.prefix == "Author"


def test_empty_prefix_is_a_configuration_error(ada):
    driver = PersonPartDisplayDriver(prefix="")

    with pytest.raises(ConfigurationError):
        driver.update(ada, UpdateModel({}))
    with pytest.raises(ConfigurationError):
        driver.render_edit(ada)


def test_failed_update_raises_as_one_validation_error(driver, ada):
    from trainingdemo.exceptions import ValidationError

    result = driver.update(ada, UpdateModel({"PersonPart.Handedness": "left"}))

    with pytest.raises(ValidationError) as excinfo:
        result.raise_for_errors()
    assert excinfo.value.status_code == 422
    assert [e["field"] for e in excinfo.value.details["errors"]] == ["name", "birth_date_utc"]
    assert excinfo.value.to_dict() == {
        "code": "VALIDATION_ERROR",
        "message": str(excinfo.value),
        "details": excinfo.value.details,
    }
