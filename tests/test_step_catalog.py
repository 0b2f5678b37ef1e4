from __future__ import annotations

from dataclasses import replace

import pytest

from constants.keys import FieldKey, FormType
from wizard.fields import FIELD_SPECS, field_spec
from wizard.step_catalog import (
    FORM_CATALOG,
    CatalogError,
    FormDefinition,
    StepDefinition,
    get_form,
    get_steps,
    verify_catalog,
)
from wizard.validators import FIELD_VALIDATORS


def test_every_form_type_has_steps() -> None:
    for form_type in FormType:
        assert get_steps(form_type), form_type


def test_application_steps_are_ordered() -> None:
    assert [step.id for step in get_steps(FormType.APPLICATION)] == [
        "personal",
        "employment",
        "financing",
        "consent",
    ]
    assert get_form("application").step_count == 4


def test_single_step_forms() -> None:
    for form_type in (FormType.CONTACT, FormType.COMPLAINT, FormType.INQUIRY):
        definition = get_form(form_type)
        assert definition.step_count == 1
        assert definition.last_index == 0
        assert definition.steps[0].owns(FieldKey.CONSENT_PDPL)


def test_reference_prefixes() -> None:
    assert get_form(FormType.APPLICATION).reference_prefix == "APP"
    assert get_form(FormType.CONTACT).reference_prefix == "INQ"
    assert get_form(FormType.COMPLAINT).reference_prefix == "CMP"
    assert get_form(FormType.INQUIRY).reference_prefix == "INQ"


def test_apply_alias_resolves_to_application() -> None:
    assert get_form("apply") is FORM_CATALOG[FormType.APPLICATION]
    assert FormType.parse(" Apply ") is FormType.APPLICATION


def test_unknown_form_type_raises_catalog_error() -> None:
    with pytest.raises(CatalogError):
        get_form("mortgage")


def test_every_catalog_field_has_rendering_metadata() -> None:
    for definition in FORM_CATALOG.values():
        for key in definition.fields():
            assert key in FIELD_SPECS
            assert field_spec(key).key is key


def test_validated_fields_appear_in_some_form() -> None:
    used = {key for definition in FORM_CATALOG.values() for key in definition.fields()}
    assert set(FIELD_VALIDATORS) <= used


def test_fields_are_deduplicated_in_first_seen_order() -> None:
    definition = FormDefinition(
        form_type=FormType.CONTACT,
        reference_prefix="INQ",
        steps=(
            StepDefinition(id="a", title="x", fields=(FieldKey.FULL_NAME, FieldKey.PHONE)),
            StepDefinition(id="b", title="y", fields=(FieldKey.PHONE, FieldKey.EMAIL)),
        ),
    )

    assert definition.fields() == (FieldKey.FULL_NAME, FieldKey.PHONE, FieldKey.EMAIL)


def test_verify_catalog_accepts_shipped_catalog() -> None:
    verify_catalog()


def test_verify_catalog_rejects_missing_form_type() -> None:
    catalog = {key: value for key, value in FORM_CATALOG.items() if key is not FormType.COMPLAINT}

    with pytest.raises(CatalogError, match="complaint"):
        verify_catalog(catalog)


def test_verify_catalog_rejects_empty_steps() -> None:
    catalog = dict(FORM_CATALOG)
    catalog[FormType.INQUIRY] = replace(FORM_CATALOG[FormType.INQUIRY], steps=())

    with pytest.raises(CatalogError, match="no steps"):
        verify_catalog(catalog)


def test_verify_catalog_rejects_bad_prefix_and_duplicate_ids() -> None:
    catalog = dict(FORM_CATALOG)
    catalog[FormType.CONTACT] = replace(FORM_CATALOG[FormType.CONTACT], reference_prefix="inq1")
    with pytest.raises(CatalogError, match="prefix"):
        verify_catalog(catalog)

    application = FORM_CATALOG[FormType.APPLICATION]
    catalog = dict(FORM_CATALOG)
    catalog[FormType.APPLICATION] = replace(application, steps=application.steps + (application.steps[0],))
    with pytest.raises(CatalogError, match="Duplicate"):
        verify_catalog(catalog)


def test_unknown_field_key_is_rejected() -> None:
    with pytest.raises(ValueError):
        field_spec("favouriteColour")
