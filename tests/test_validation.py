import json

import pytest

from core.domain.models import SoilSuitabilityInput, SoilSuitabilityOutput
from core.domain.validation import Invalid, Valid, extract_json_object, validate_request, validate_result


class TestValidateRequest:
    def test_accepts_wire_names(self, valid_payload):
        checked = validate_request(valid_payload)

        assert isinstance(checked, Valid)
        assert checked.ok
        assert checked.value.soil_ph == 6.5
        assert checked.value.soil_bd == 1.3
        assert checked.value.building_description == "Two-story residential home, wood frame"

    def test_accepts_python_names(self):
        checked = validate_request({"soil_ph": 7, "soil_bd": 1.1, "building_description": "Shed"})

        assert isinstance(checked, Valid)
        assert checked.value.soil_ph == 7

    def test_passes_model_instance_through(self, valid_payload):
        request = SoilSuitabilityInput.model_validate(valid_payload)

        checked = validate_request(request)

        assert isinstance(checked, Valid)
        assert checked.value is request

    @pytest.mark.parametrize("missing", ["soilPh", "soilBd", "buildingDescription"])
    def test_reports_missing_field(self, valid_payload, missing):
        del valid_payload[missing]

        checked = validate_request(valid_payload)

        assert isinstance(checked, Invalid)
        assert not checked.ok
        assert checked.field == missing
        assert checked.message

    def test_reports_first_missing_field(self):
        checked = validate_request({})

        assert isinstance(checked, Invalid)
        assert checked.field == "soilPh"

    @pytest.mark.parametrize(
        "field, value",
        [
            ("soilPh", "6.5"),
            ("soilBd", "1.3"),
            ("buildingDescription", 42),
            ("soilPh", None),
        ],
    )
    def test_rejects_wrong_primitive_type(self, valid_payload, field, value):
        valid_payload[field] = value

        checked = validate_request(valid_payload)

        assert isinstance(checked, Invalid)
        assert checked.field == field

    def test_no_range_or_length_constraints(self):
        checked = validate_request({"soilPh": 14.2, "soilBd": -1, "buildingDescription": ""})

        assert isinstance(checked, Valid)
        assert checked.value.soil_ph == 14.2
        assert checked.value.soil_bd == -1
        assert checked.value.building_description == ""

    def test_rejects_non_mapping(self):
        checked = validate_request(["6.5", "1.3", "house"])

        assert isinstance(checked, Invalid)
        assert checked.field is None


class TestValidateResult:
    def test_accepts_mapping(self):
        checked = validate_result({"suitabilityAssessment": "Suitable with shallow footings."})

        assert isinstance(checked, Valid)
        assert checked.value == SoilSuitabilityOutput(suitability_assessment="Suitable with shallow footings.")

    def test_ignores_extra_keys(self):
        checked = validate_result({"suitabilityAssessment": "ok", "confidence": 0.9})

        assert isinstance(checked, Valid)
        assert checked.value.suitability_assessment == "ok"

    @pytest.mark.parametrize(
        "text",
        [
            '{"suitabilityAssessment": "X"}',
            '```json\n{"suitabilityAssessment": "X"}\n```',
            'Here is the result: {"suitabilityAssessment": "X"} Hope it helps.',
        ],
    )
    def test_accepts_completion_text(self, text):
        checked = validate_result(text)

        assert isinstance(checked, Valid)
        assert checked.value.suitability_assessment == "X"

    def test_missing_field_is_invalid(self):
        checked = validate_result({"assessment": "X"})

        assert isinstance(checked, Invalid)
        assert checked.field == "suitabilityAssessment"

    def test_non_string_field_is_invalid(self):
        checked = validate_result({"suitabilityAssessment": ["X"]})

        assert isinstance(checked, Invalid)
        assert checked.field == "suitabilityAssessment"

    @pytest.mark.parametrize("raw", [None, "", "The soil looks fine.", "{not json}", 17])
    def test_unusable_payload_is_invalid(self, raw):
        checked = validate_result(raw)

        assert isinstance(checked, Invalid)


def test_extract_json_object_returns_none_without_object():
    assert extract_json_object("no braces here") is None
    assert extract_json_object('```json\n{"a": 1}\n```') == '{"a": 1}'


def test_fenced_snippet_inside_assessment_is_kept():
    assessment = 'Use footing spec ```json {"depth_m": 1.2} ``` as baseline.'
    text = json.dumps({"suitabilityAssessment": assessment})

    checked = validate_result(text)

    assert isinstance(checked, Valid)
    assert checked.value.suitability_assessment == assessment


def test_embedded_object_with_inner_fence_is_kept():
    text = 'Result: {"suitabilityAssessment": "Example: ```{}``` then build."} Done.'

    checked = validate_result(text)

    assert isinstance(checked, Valid)
    assert checked.value.suitability_assessment == "Example: ```{}``` then build."


def test_utf8_bytes_are_decoded():
    checked = validate_result('{"suitabilityAssessment": "Densidad 1,3 kg/dm³"}'.encode("utf-8"))

    assert isinstance(checked, Valid)
    assert checked.value.suitability_assessment == "Densidad 1,3 kg/dm³"


def test_invalid_utf8_bytes_are_rejected():
    checked = validate_result(b'{"suitabilityAssessment": "caf\xe9"}')

    assert isinstance(checked, Invalid)
    assert "UTF-8" in checked.message
