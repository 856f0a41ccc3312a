from __future__ import annotations

import copy
import threading

import pytest

from process_validator import ConfigurationError, Validator, ValidatorOptions, validate_against_schema
from process_validator.schemas import PROCESS_CONFIG_SCHEMA, process_config_schema
from process_validator.validator import Flow, canonical, kind_of


def _keywords(result):
    return [error.keyword for error in result.errors]


def _paths(result):
    return [error.path for error in result.errors]


# ---- construction -----------------------------------------------------------------------


@pytest.mark.parametrize("schema", [None, "schema", 42, ["type", "object"]])
def test_construction_rejects_non_object_schema(schema):
    with pytest.raises(ConfigurationError, match="A JSON schema object is required"):
        Validator(schema)


def test_construction_rejects_invalid_pattern():
    with pytest.raises(ConfigurationError, match="Invalid pattern"):
        Validator({"properties": {"name": {"type": "string", "pattern": "("}}})


def test_options_default_to_collecting_all_errors():
    assert Validator({}).collect_all_errors is True
    assert Validator({}, {"collectAllErrors": False}).collect_all_errors is False
    assert Validator({}, ValidatorOptions(collect_all_errors=False)).collect_all_errors is False


def test_empty_schema_accepts_anything():
    validator = Validator({})
    for value in (None, True, 1, 1.5, "x", [1, "a"], {"a": {"b": []}}):
        assert validator.validate(value).valid


# ---- documented examples ----------------------------------------------------------------


def test_integer_within_bounds_is_valid():
    result = validate_against_schema({"type": "integer", "minimum": 0, "maximum": 10}, 5)

    assert result.valid is True
    assert result.errors == ()
    assert result.error_summary is None


def test_integer_below_minimum_reports_bound():
    result = validate_against_schema({"type": "integer", "minimum": 0, "maximum": 10}, -1)

    assert _keywords(result) == ["minimum"]
    assert result.errors[0].path == ""
    assert result.errors[0].message == "Value must be greater than or equal to 0"
    assert result.error_summary == ("at root: Value must be greater than or equal to 0",)


def test_additional_property_is_reported_at_its_key():
    schema = {
        "type": "object",
        "required": ["name"],
        "properties": {"name": {"type": "string"}},
        "additionalProperties": False,
    }

    result = validate_against_schema(schema, {"name": "a", "extra": True})

    assert _keywords(result) == ["additionalProperties"]
    assert _paths(result) == ["extra"]
    assert result.errors[0].message == "Unexpected property 'extra' is not allowed"


def test_duplicate_array_item_is_reported_at_index():
    schema = {"type": "array", "items": {"type": "string"}, "uniqueItems": True}

    result = validate_against_schema(schema, ["a", "a"])

    assert _keywords(result) == ["uniqueItems"]
    assert _paths(result) == ["[1]"]
    assert result.error_summary == ("at [1]: Array items must be unique",)


def test_process_config_errors_follow_traversal_order(valid_config):
    config = dict(valid_config, retries=-1, tags=["alpha", "alpha"], extra=True)

    result = Validator(PROCESS_CONFIG_SCHEMA).validate(config)

    assert [(e.keyword, e.path) for e in result.errors] == [
        ("minimum", "retries"),
        ("uniqueItems", "tags[1]"),
        ("additionalProperties", "extra"),
    ]


# ---- type -------------------------------------------------------------------------------


@pytest.mark.parametrize(
    ("value", "kind"),
    [
        (None, "null"),
        (True, "boolean"),
        (0, "number"),
        (2.5, "number"),
        ("s", "string"),
        ([], "array"),
        ((1, 2), "array"),
        ({}, "object"),
        (b"raw", "bytes"),
    ],
)
def test_kind_of(value, kind):
    assert kind_of(value) == kind


def test_type_mismatch_message_lists_all_candidates():
    result = validate_against_schema({"type": ["string", "null"]}, 3)

    assert result.errors[0].keyword == "type"
    assert result.errors[0].message == "Expected type string or null, but received number"


@pytest.mark.parametrize(
    ("type_name", "value", "valid"),
    [
        ("integer", 3, True),
        ("integer", 3.0, True),
        ("integer", 3.5, False),
        ("integer", True, False),
        ("number", 3.5, True),
        ("number", False, False),
        ("boolean", False, True),
        ("boolean", 0, False),
        ("null", None, True),
        ("null", 0, False),
        ("array", [1], True),
        ("array", {"0": 1}, False),
        ("object", {"a": 1}, True),
        ("object", [], False),
        ("string", "", True),
    ],
)
def test_type_matching(type_name, value, valid):
    assert validate_against_schema({"type": type_name}, value).valid is valid


def test_fractional_value_for_integer_reports_both_type_errors():
    result = validate_against_schema({"type": "integer", "minimum": 5}, 1.5)

    assert [(e.keyword, e.message) for e in result.errors] == [
        ("type", "Expected type integer, but received number"),
        ("type", "Value must be an integer"),
        ("minimum", "Value must be greater than or equal to 5"),
    ]


def test_type_failure_stops_node_in_first_failure_mode():
    schema = {"type": "integer", "minimum": 5}

    result = validate_against_schema(schema, 1.5, {"collectAllErrors": False})

    assert [(e.keyword, e.message) for e in result.errors] == [
        ("type", "Expected type integer, but received number"),
    ]


def test_multi_type_dispatch_uses_matching_candidate():
    schema = {"type": ["string", "number"], "minLength": 3, "minimum": 10}

    assert _keywords(validate_against_schema(schema, "ab")) == ["minLength"]
    assert _keywords(validate_against_schema(schema, 2)) == ["minimum"]


def test_declared_object_shape_is_skipped_for_non_object_value():
    schema = {"type": "object", "required": ["name"]}

    result = validate_against_schema(schema, ["name"])

    assert _keywords(result) == ["type"]


def test_boolean_and_null_values_get_no_branch_checks():
    schema = {"minimum": 5, "minLength": 3, "required": ["a"], "minItems": 2}

    assert validate_against_schema(schema, True).valid
    assert validate_against_schema(schema, None).valid


# ---- enum -------------------------------------------------------------------------------


def test_enum_message_renders_json_literals():
    result = validate_against_schema({"enum": ["http", 1, True, None]}, "udp")

    assert result.errors[0].keyword == "enum"
    assert result.errors[0].message == 'Value must be one of: "http", 1, true, null'


@pytest.mark.parametrize(
    ("value", "valid"),
    [
        (1, True),
        (1.0, True),
        (True, False),
        ("1", False),
        ({"a": [1, 2]}, True),
        ({"a": [2, 1]}, False),
    ],
)
def test_enum_membership_is_structural_and_kind_aware(value, valid):
    schema = {"enum": [1, {"a": [1, 2]}]}

    assert validate_against_schema(schema, value).valid is valid


def test_empty_enum_rejects_everything():
    result = validate_against_schema({"enum": []}, "x")

    assert result.errors[0].message == "Value must be one of: "


def test_enum_failure_does_not_stop_first_failure_mode():
    schema = {"type": "string", "enum": ["abc"], "minLength": 5}

    result = validate_against_schema(schema, "xy", {"collectAllErrors": False})

    assert _keywords(result) == ["enum", "minLength"]


# ---- objects ----------------------------------------------------------------------------


def test_missing_required_properties_are_reported_in_listed_order():
    schema = {"type": "object", "required": ["b", "a"]}

    result = validate_against_schema(schema, {})

    assert _paths(result) == ["b", "a"]
    assert result.errors[0].message == "Missing required property 'b'"


def test_required_abort_in_first_failure_mode():
    schema = {
        "type": "object",
        "required": ["a", "b"],
        "properties": {"c": {"type": "string"}},
        "additionalProperties": False,
    }

    result = validate_against_schema(schema, {"c": 1, "d": 2}, {"collectAllErrors": False})

    assert _paths(result) == ["a"]


def test_absent_optional_properties_are_not_checked():
    schema = {"type": "object", "properties": {"a": {"type": "string", "minLength": 2}}}

    assert validate_against_schema(schema, {}).valid


def test_nested_path_composition():
    schema = {
        "type": "object",
        "properties": {
            "a": {
                "type": "object",
                "properties": {
                    "b": {
                        "type": "array",
                        "items": {"type": "object", "properties": {"c": {"type": "string"}}},
                    }
                },
            }
        },
    }
    data = {"a": {"b": [{"c": "ok"}, {"c": "ok"}, {"c": 3}]}}

    result = validate_against_schema(schema, data)

    assert _paths(result) == ["a.b[2].c"]
    assert result.error_summary == ("at a.b[2].c: Expected type string, but received number",)


def test_health_check_timeout_path(valid_config):
    config = copy.deepcopy(valid_config)
    config["healthCheck"]["timeout"] = 120

    result = Validator(PROCESS_CONFIG_SCHEMA).validate(config)

    assert [(e.keyword, e.path) for e in result.errors] == [("maximum", "healthCheck.timeout")]


def test_tag_element_path(valid_config):
    config = dict(valid_config, tags=["a", "b", ""])

    result = Validator(PROCESS_CONFIG_SCHEMA).validate(config)

    assert [(e.keyword, e.path) for e in result.errors] == [("minLength", "tags[2]")]


def test_properties_stop_after_first_error_in_first_failure_mode():
    schema = {
        "type": "object",
        "properties": {"a": {"type": "string"}, "b": {"type": "string"}},
        "additionalProperties": False,
    }

    result = validate_against_schema(schema, {"a": 1, "b": 2, "c": 3}, {"collectAllErrors": False})

    assert _paths(result) == ["a"]


def test_additional_properties_need_declared_properties():
    assert validate_against_schema({"additionalProperties": False}, {"x": 1}).valid
    result = validate_against_schema({"properties": {}, "additionalProperties": False}, {"x": 1})
    assert _paths(result) == ["x"]


def test_additional_properties_short_circuit():
    schema = {"properties": {}, "additionalProperties": False}

    exhaustive = validate_against_schema(schema, {"x": 1, "y": 2})
    first = validate_against_schema(schema, {"x": 1, "y": 2}, {"collectAllErrors": False})

    assert _paths(exhaustive) == ["x", "y"]
    assert _paths(first) == ["x"]


def test_non_mapping_property_schema_is_unconstrained():
    schema = {"properties": {"a": True}, "additionalProperties": False}

    assert validate_against_schema(schema, {"a": [1, 2, 3]}).valid


# ---- strings ----------------------------------------------------------------------------


def test_string_checks_all_run():
    schema = {"type": "string", "minLength": 5, "pattern": "^[a-z]+$"}

    result = validate_against_schema(schema, "AB", {"collectAllErrors": False})

    assert [(e.keyword, e.message) for e in result.errors] == [
        ("minLength", "String is too short. Minimum length is 5"),
        ("pattern", "String does not match required pattern ^[a-z]+$"),
    ]


def test_max_length():
    result = validate_against_schema({"maxLength": 2}, "abc")

    assert result.errors[0].message == "String is too long. Maximum length is 2"


def test_pattern_matches_anywhere_in_string():
    assert validate_against_schema({"pattern": "b+"}, "abbbc").valid


def test_length_counts_characters():
    assert validate_against_schema({"maxLength": 2}, "été"[:2]).valid
    assert validate_against_schema({"minLength": 3, "maxLength": 3}, "日本語").valid


# ---- numbers ----------------------------------------------------------------------------


@pytest.mark.parametrize(
    ("schema", "value", "keyword", "message"),
    [
        ({"maximum": 10}, 11, "maximum", "Value must be less than or equal to 10"),
        ({"exclusiveMinimum": 0}, 0, "exclusiveMinimum", "Value must be greater than 0"),
        ({"exclusiveMaximum": 2.5}, 2.5, "exclusiveMaximum", "Value must be less than 2.5"),
        ({"minimum": 1.0}, 0.5, "minimum", "Value must be greater than or equal to 1"),
    ],
)
def test_numeric_bounds(schema, value, keyword, message):
    result = validate_against_schema(schema, value)

    assert [(e.keyword, e.message) for e in result.errors] == [(keyword, message)]


def test_inclusive_bounds_accept_the_bound():
    assert validate_against_schema({"minimum": 0, "maximum": 0}, 0).valid


def test_all_numeric_bounds_are_independent():
    schema = {"minimum": 10, "exclusiveMinimum": 10, "maximum": 0, "exclusiveMaximum": 0}

    result = validate_against_schema(schema, 5)

    assert _keywords(result) == ["minimum", "maximum", "exclusiveMinimum", "exclusiveMaximum"]


def test_non_numeric_bound_keywords_are_ignored():
    assert validate_against_schema({"minimum": "10", "maxLength": True}, 1).valid


# ---- arrays -----------------------------------------------------------------------------


def test_item_count_bounds():
    assert validate_against_schema({"minItems": 2}, [1]).errors[0].message == (
        "Array must contain at least 2 item(s)"
    )
    assert validate_against_schema({"maxItems": 1}, [1, 2]).errors[0].message == (
        "Array must contain no more than 1 item(s)"
    )


def test_unique_items_compares_structure():
    result = validate_against_schema({"uniqueItems": True}, [{"a": 1, "b": 2}, {"b": 2, "a": 1}, [1], [1.0]])

    assert _paths(result) == ["[1]", "[3]"]


def test_unique_items_distinguishes_booleans_from_numbers():
    assert validate_against_schema({"uniqueItems": True}, [1, True, 0, False]).valid


def test_unique_items_short_circuit_skips_item_checks():
    schema = {"uniqueItems": True, "items": {"type": "string"}}

    exhaustive = validate_against_schema(schema, [1, 1, 1])
    first = validate_against_schema(schema, [1, 1, 1], {"collectAllErrors": False})

    assert [(e.keyword, e.path) for e in exhaustive.errors] == [
        ("uniqueItems", "[1]"),
        ("uniqueItems", "[2]"),
        ("type", "[0]"),
        ("type", "[1]"),
        ("type", "[2]"),
    ]
    assert [(e.keyword, e.path) for e in first.errors] == [("uniqueItems", "[1]")]


def test_items_apply_to_every_element_at_root():
    result = validate_against_schema({"items": {"type": "integer"}}, [1, "x", 2, None])

    assert _paths(result) == ["[1]", "[3]"]


def test_canonical_is_order_insensitive_for_objects():
    assert canonical({"a": 1, "b": [1, 2]}) == canonical({"b": [1.0, 2], "a": 1})
    assert canonical([1, 2]) != canonical([2, 1])


# ---- result properties ------------------------------------------------------------------


def test_validation_is_idempotent(valid_config):
    validator = Validator(PROCESS_CONFIG_SCHEMA)
    config = dict(valid_config, port=80, extra=1)

    assert validator.validate(config) == validator.validate(config)


def test_exhaustive_errors_are_a_superset_of_first_failure_errors(valid_config):
    config = dict(valid_config, name="x", port="80", tags=[], healthCheck={"interval": 1})
    exhaustive = Validator(PROCESS_CONFIG_SCHEMA).validate(config)
    first = Validator(PROCESS_CONFIG_SCHEMA, {"collectAllErrors": False}).validate(config)

    assert first.errors
    assert set(first.errors) <= set(exhaustive.errors)
    assert len(exhaustive.errors) > len(first.errors)


def test_validation_does_not_mutate_schema(valid_config):
    schema = process_config_schema()
    before = copy.deepcopy(schema)

    Validator(schema).validate(dict(valid_config, extra=True))

    assert schema == before


def test_validator_is_safe_to_share_between_threads(valid_config):
    validator = Validator(PROCESS_CONFIG_SCHEMA)
    bad = dict(valid_config, retries=-1)
    outcomes = []

    def worker(data):
        for _ in range(50):
            outcomes.append(len(validator.validate(data).errors))

    threads = [threading.Thread(target=worker, args=(data,)) for data in (valid_config, bad) * 4]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert sorted(set(outcomes)) == [0, 1]


# ---- control flow -----------------------------------------------------------------------


def _walk(validator, data):
    errors = []
    flow = validator._check(validator.root, data, "", errors)
    return flow, errors


def test_check_sites_report_stop_in_first_failure_mode():
    schema = {
        "type": "object",
        "properties": {
            "outer": {
                "type": "object",
                "properties": {"inner": {"type": "string"}, "other": {"type": "string"}},
            },
            "sibling": {"type": "string"},
        },
    }
    data = {"outer": {"inner": 1, "other": 2}, "sibling": 3}

    flow, errors = _walk(Validator(schema, {"collectAllErrors": False}), data)
    exhaustive_flow, exhaustive_errors = _walk(Validator(schema), data)

    assert flow is Flow.STOP
    assert [e.path for e in errors] == ["outer.inner"]
    assert exhaustive_flow is Flow.CONTINUE
    assert [e.path for e in exhaustive_errors] == ["outer.inner", "outer.other", "sibling"]


def test_items_stop_is_reported_after_all_elements_are_checked():
    validator = Validator({"items": {"type": "string"}}, {"collectAllErrors": False})

    flow, errors = _walk(validator, [1, "ok", 2])

    assert flow is Flow.STOP
    assert [e.path for e in errors] == ["[0]", "[2]"]


def test_stop_from_array_element_halts_enclosing_properties():
    schema = {
        "properties": {
            "tags": {"items": {"type": "object", "required": ["id"]}},
            "name": {"type": "string"},
        }
    }

    result = validate_against_schema(schema, {"tags": [{}, {}], "name": 5}, {"collectAllErrors": False})

    assert [e.path for e in result.errors] == ["tags[0].id", "tags[1].id"]


def test_clean_walk_continues():
    flow, errors = _walk(Validator({"type": "integer"}, {"collectAllErrors": False}), 3)

    assert flow is Flow.CONTINUE
    assert errors == []
