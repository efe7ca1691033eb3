"""
Unit tests for the extraction result models.
"""

import dataclasses

import pytest

from leadminer.extractor.models import ExtractionResult, FetchFailure, FetchOutcome


@pytest.fixture
def result():
    return ExtractionResult(
        emails=("info@firma.cz", "jan@firma.cz"),
        phones=("+420602111222",),
        registration_number="25596641",
        cms="wordpress",
        technologies=frozenset({"jquery", "bootstrap"}),
        social_profiles={"facebook": "https://www.facebook.com/Firma"},
        company_name="Firma s.r.o.",
    )


@pytest.mark.unit
class TestExtractionResult:
    """Test cases for ExtractionResult."""

    def test_empty_result(self):
        empty = ExtractionResult()
        assert empty.to_metadata() == {}
        assert empty.primary_email is None
        assert empty.primary_phone is None
        assert not empty.has_contact_data()
        assert not empty.has_technology_data()

    def test_to_metadata(self, result):
        assert result.to_metadata() == {
            "extracted_emails": ["info@firma.cz", "jan@firma.cz"],
            "extracted_phones": ["+420602111222"],
            "extracted_registration_number": "25596641",
            "detected_cms": "wordpress",
            "detected_technologies": ["bootstrap", "jquery"],
            "social_media": {"facebook": "https://www.facebook.com/Firma"},
            "extracted_company_name": "Firma s.r.o.",
        }

    def test_metadata_omits_empty_fields(self):
        metadata = ExtractionResult(phones=["+420602111222"]).to_metadata()
        assert metadata == {"extracted_phones": ["+420602111222"]}

    def test_primary_values(self, result):
        assert result.primary_email == "info@firma.cz"
        assert result.primary_phone == "+420602111222"
        assert result.has_contact_data()
        assert result.has_technology_data()

    def test_registration_number_alone_is_contact_data(self):
        assert ExtractionResult(registration_number="25596641").has_contact_data()

    def test_technology_without_cms(self):
        assert ExtractionResult(technologies={"jquery"}).has_technology_data()

    def test_immutability(self, result):
        with pytest.raises(dataclasses.FrozenInstanceError):
            result.cms = "drupal"
        with pytest.raises(TypeError):
            result.social_profiles["twitter"] = "https://x.com/firma"

    def test_hashable_and_consistent_with_equality(self, result):
        twin = ExtractionResult(
            emails=["info@firma.cz", "jan@firma.cz"],
            phones=["+420602111222"],
            registration_number="25596641",
            cms="wordpress",
            technologies={"bootstrap", "jquery"},
            social_profiles={"facebook": "https://www.facebook.com/Firma"},
            company_name="Firma s.r.o.",
        )
        assert twin == result
        assert hash(twin) == hash(result)
        assert len({result, twin, ExtractionResult()}) == 2

    def test_caller_dict_does_not_leak_in(self):
        profiles = {"facebook": "https://www.facebook.com/Firma"}
        frozen = ExtractionResult(social_profiles=profiles)
        profiles["instagram"] = "https://instagram.com/firma"
        assert "instagram" not in frozen.social_profiles

    def test_merge_contacts_is_order_preserving_union(self, result):
        merged = result.merge_contacts(
            emails=["jan@firma.cz", "obchod@firma.cz"],
            phones=["+420777123456", "+420602111222"],
        )
        assert merged.emails == ("info@firma.cz", "jan@firma.cz", "obchod@firma.cz")
        assert merged.phones == ("+420602111222", "+420777123456")
        assert merged.cms == result.cms
        assert merged.social_profiles == result.social_profiles
        assert result.emails == ("info@firma.cz", "jan@firma.cz")


@pytest.mark.unit
class TestFetchOutcome:
    """Test cases for FetchOutcome."""

    def test_success(self):
        outcome = FetchOutcome(result=ExtractionResult())
        assert outcome.ok
        assert outcome.error is None

    def test_failure(self):
        outcome = FetchOutcome(error="HTTP 404", failure=FetchFailure.HTTP_STATUS)
        assert not outcome.ok
        assert outcome.failure.value == "http_status"
