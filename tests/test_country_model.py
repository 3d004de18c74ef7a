import pytest
from bson import ObjectId
from pydantic import ValidationError

from domain.models.country import Country, validation_details
from domain.models.country_cache import CountryCache


def test_country_accepts_api_field_names():
    country = Country.model_validate({"entityId": "fr", "name": "France", "isoCode": "FR"})
    assert country.entity_id == "fr"
    assert country.iso_code == "FR"
    assert country.technical_id is None


def test_to_api_never_exposes_technical_id():
    oid = ObjectId()
    country = Country.from_mongo(
        {"_id": oid, "entityId": "fr", "name": "France", "isoCode": "FR"}
    )
    assert country.technical_id == str(oid)
    assert country.to_api() == {"entityId": "fr", "name": "France", "isoCode": "FR"}


def test_to_mongo_restores_object_id():
    oid = ObjectId()
    country = Country(technical_id=str(oid), entity_id="fr", name="France", iso_code="FR")
    doc = country.to_mongo()
    assert doc["_id"] == oid
    assert doc["entityId"] == "fr"


def test_to_mongo_without_technical_id_lets_mongo_assign_it():
    country = Country(entity_id="fr", name="France", iso_code="FR")
    assert "_id" not in country.to_mongo()


def test_from_api_drops_client_supplied_storage_ids():
    country = Country.from_api(
        {
            "_id": "64b000000000000000000000",
            "technicalId": "64b000000000000000000001",
            "entityId": "fr",
            "name": "France",
            "isoCode": "FR",
        }
    )
    assert country.technical_id is None


@pytest.mark.parametrize("field", ["entityId", "name", "isoCode"])
def test_required_fields_reject_blank_values(field):
    payload = {"entityId": "fr", "name": "France", "isoCode": "FR", field: "   "}
    with pytest.raises(ValidationError) as excinfo:
        Country.from_api(payload)
    details = validation_details(excinfo.value)
    assert list(details) == [field]
    assert "required" in details[field][0]


def test_missing_fields_are_reported_by_api_name():
    with pytest.raises(ValidationError) as excinfo:
        Country.from_api({"name": "France"})
    details = validation_details(excinfo.value)
    assert set(details) == {"entityId", "isoCode"}


def test_from_mongo_none():
    assert Country.from_mongo(None) is None


def test_country_cache_projection_round_trip():
    country = Country(technical_id=str(ObjectId()), entity_id="fr", name="France", iso_code="FR")
    cached = CountryCache.from_country(country)

    restored = cached.to_country()

    assert restored.to_api() == country.to_api()
    assert restored.technical_id is None


def test_country_cache_defaults_to_empty_values():
    restored = CountryCache(entity_id="fr").to_country()
    assert restored.name == ""
    assert restored.iso_code == ""


def test_country_cache_is_immutable():
    cached = CountryCache(entity_id="fr", name="France", iso_code="FR")
    with pytest.raises(ValidationError):
        cached.name = "Spain"


def test_from_mongo_does_not_revalidate_stored_documents():
    oid = ObjectId()
    country = Country.from_mongo({"_id": oid, "entityId": "xx", "name": "  ", "isoCode": "XX"})

    assert country.technical_id == str(oid)
    assert country.to_api() == {"entityId": "xx", "name": "  ", "isoCode": "XX"}


def test_from_mongo_fills_missing_keys_with_empty_values():
    country = Country.from_mongo({"entityId": "xx"})
    assert country.technical_id is None
    assert country.name == ""
    assert country.iso_code == ""
