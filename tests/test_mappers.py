from datetime import UTC, datetime

import pandas as pd
import pytest

from itsm_app.core.mappers import (
    as_field,
    decode_records,
    display,
    map_priority,
    normalize_change_state,
    normalize_incident_state,
    parse_bool,
    parse_float,
    parse_timestamp,
    records_to_dataframe,
    text,
    value,
)
from itsm_app.core.models import Display, Scalar


def test_as_field_variants():
    assert as_field("abc") == Scalar("abc")
    assert as_field(True) == Scalar("true")
    assert as_field({"display_value": "1 - Critical", "value": "1"}) == Display("1 - Critical", "1")
    assert as_field(None) is None
    with pytest.raises(ValueError):
        as_field([1, 2])


def test_display_value_text_accessors():
    pair = Display(display="", raw="software")
    assert display(pair) == ""
    assert value(pair) == "software"
    assert text(pair) == "software"
    assert text(Scalar("x")) == "x"
    assert text(None) == ""


def test_decode_records_shape():
    payload = {"result": [{"number": "INC1", "priority": {"display_value": "2 - High", "value": "2"}}]}
    records = decode_records(payload)
    assert records == [{"number": Scalar("INC1"), "priority": Display("2 - High", "2")}]
    assert decode_records({}) == []
    with pytest.raises(ValueError):
        decode_records({"result": "nope"})
    with pytest.raises(ValueError):
        decode_records([])


def test_priority_mapping():
    assert map_priority(Display("1 - Critical", "1")) == "P1"
    assert map_priority(Scalar("3")) == "P3"
    assert map_priority(Scalar("P2")) == "P2"
    assert map_priority(Scalar("banana")) == "P4"
    assert map_priority(Scalar("12")) == "P4"
    assert map_priority(None) == "P4"


def test_parse_helpers():
    ts = parse_timestamp(Display("01/02/2024 10:00", "2024-01-02 10:00:00"))
    assert ts == pd.Timestamp("2024-01-02 10:00:00", tz="UTC")
    assert parse_timestamp(Scalar("garbage")) is None
    assert parse_timestamp(datetime(2024, 1, 1, tzinfo=UTC)) == pd.Timestamp("2024-01-01", tz="UTC")
    assert parse_bool(Scalar("true")) is True
    assert parse_bool(Display("false", "false")) is False
    assert parse_float(Scalar("12.5")) == 12.5
    assert parse_float(Scalar("n/a")) is None


def test_state_normalization():
    assert normalize_incident_state(Display("Resolved", "6")) == "Resolved"
    assert normalize_change_state(Display("Completed", "completed")) == "Completed"
    assert normalize_change_state(None) == "Unknown"


def test_records_to_dataframe():
    df = records_to_dataframe([{"number": Scalar("INC1")}], ["number", "priority"])
    assert list(df.columns) == ["number", "priority"]
    assert df.iloc[0]["number"] == "INC1"
    assert df.iloc[0]["priority"] == ""
