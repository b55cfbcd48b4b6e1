from dataclasses import fields

from brascollect.http_serializer import HttpRecord, serialize_http

STRING_FIELDS = [f.name for f in fields(HttpRecord) if f.type in ("str", str)]


def _index(name):
    return [f.name for f in fields(HttpRecord)].index(name)


def test_one_column_per_field():
    parts = serialize_http(HttpRecord()).split("\t")
    assert len(parts) == len(fields(HttpRecord))


def test_empty_strings_become_none():
    parts = serialize_http(HttpRecord()).split("\t")
    assert STRING_FIELDS
    for name in STRING_FIELDS:
        assert parts[_index(name)] == "NONE"


def test_tabs_and_newlines_replaced_by_spaces():
    rec = HttpRecord(user_agent="a\tb", url="/x\n/y")
    parts = serialize_http(rec).split("\t")
    assert len(parts) == len(fields(HttpRecord))
    assert parts[_index("user_agent")] == "a b"
    assert parts[_index("url")] == "/x /y"


def test_columns_follow_field_order():
    rec = HttpRecord(
        hour_round_time=1623319200,
        min_round_time=1623319920,
        start_time=1623319927.5,
        user_account="account",
        user_ip=167772161,
        server_port=80,
        status_code=200,
        host_name="www.example.com",
        url="/index.html",
        ul_packets=9,
        downlink_disorder_cnt=4,
    )
    parts = serialize_http(rec).split("\t")
    for f in fields(HttpRecord):
        value = getattr(rec, f.name)
        cell = parts[_index(f.name)]
        if f.name == "start_time":
            assert float(cell) == value
        elif isinstance(value, str):
            assert cell == (value or "NONE")
        else:
            assert cell == str(value)


def test_start_time_six_decimals():
    parts = serialize_http(HttpRecord(start_time=2.25)).split("\t")
    assert parts[2] == "2.250000"


def test_second_user_agent_is_last_without_tab():
    line = serialize_http(HttpRecord(second_user_agent="agent2"))
    assert not line.endswith("\t")
    assert line.rsplit("\t", 1)[1] == "agent2"