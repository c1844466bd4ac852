from datetime import datetime, timezone

import pytest

from trainingdemo.content_management.binding import UpdateModel
from trainingdemo.exceptions import ConfigurationError
from trainingdemo.person.models import Handedness
from trainingdemo.person.view_models import PersonPartViewModel


def test_binds_prefixed_pascal_case_keys():
    model = PersonPartViewModel()
    updater = UpdateModel(
        {
            "PersonPart.Name": "  Ada  ",
            "PersonPart.BirthDateUtc": "2000-01-01T02:00:00+02:00",
            "PersonPart.Handedness": "AMBIDEXTROUS",
            "Other.Name": "ignored",
        }
    )

    assert updater.try_update_model(model, "PersonPart") is True
    assert updater.is_valid
    assert model.name == "  Ada  "
    assert model.birth_date_utc == datetime(2000, 1, 1, tzinfo=timezone.utc)
    assert model.birth_date_utc.tzinfo == timezone.utc
    assert model.handedness is Handedness.ambidextrous


def test_failed_fields_keep_current_value_and_record_errors():
    model = PersonPartViewModel(name="Before")
    updater = UpdateModel(
        {
            "PersonPart.Name": "After",
            "PersonPart.BirthDateUtc": "31/31/2000",
        }
    )

    assert updater.try_update_model(model, "PersonPart") is False
    assert model.name == "After"
    assert model.birth_date_utc is None
    assert [e.field for e in updater.model_state] == ["birth_date_utc"]
    assert updater.errors_for("birth_date_utc")[0].message


def test_blank_values_bind_as_missing():
    model = PersonPartViewModel()
    updater = UpdateModel({"PersonPart.BirthDateUtc": "", "PersonPart.Handedness": " "})

    assert updater.try_update_model(model, "PersonPart")
    assert model.birth_date_utc is None
    assert model.handedness is None


def test_excluded_fields_are_not_bound():
    model = PersonPartViewModel()
    updater = UpdateModel({"PersonPart.Name": "Ada"})

    updater.try_update_model(model, "PersonPart", exclude={"name"})

    assert model.name == ""


def test_prefix_is_required():
    with pytest.raises(ConfigurationError):
        UpdateModel({}).try_update_model(PersonPartViewModel(), "")
