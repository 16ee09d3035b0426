"""Tests for shared/models.py."""

import pytest

from shared.models import (
    CamelModel,
    Envelope,
    ErrorEnvelope,
    ListEnvelope,
    PageRef,
    TokenEnvelope,
)


class Sample(CamelModel):
    average_cost: int
    job_guarantee: bool = False


class TestCamelModel:
    def test_accepts_camel_case(self):
        assert Sample.model_validate({"averageCost": 10000}).average_cost == 10000

    def test_accepts_field_names(self):
        assert Sample(average_cost=5).average_cost == 5

    def test_dumps_camel_case_by_alias(self):
        assert Sample(average_cost=5).model_dump(by_alias=True) == {
            "averageCost": 5,
            "jobGuarantee": False,
        }


class TestEnvelopes:
    def test_single_resource_envelope(self):
        assert Envelope(data={"id": "1"}).model_dump() == {"success": True, "data": {"id": "1"}}

    def test_list_envelope_defaults_to_empty_pagination(self):
        envelope = ListEnvelope(count=0, data=[])
        assert envelope.model_dump() == {
            "success": True,
            "count": 0,
            "data": [],
            "pagination": {},
        }

    def test_token_envelope(self):
        assert TokenEnvelope(token="abc").model_dump() == {"success": True, "token": "abc"}

    def test_error_envelope(self):
        assert ErrorEnvelope(error="Server Error").model_dump() == {
            "success": False,
            "error": "Server Error",
        }

    def test_page_ref_is_positive(self):
        with pytest.raises(Exception):
            PageRef(page=0, limit=25)
