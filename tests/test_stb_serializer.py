import json

from brascollect.stb_serializer import StbRecord, serialize_stb


def _sample():
    content = json.dumps({"deviceInfo": {"macaddress": "02:00:00:00:00:01"},
                          "stbRunTime": 3600})
    return StbRecord(
        msg_time=1623319927,
        user_account="stbuser",
        user_mac_address=0x020000000001,
        server_ip=167772161,
        msg_content=content,
    )


def test_five_fields_in_order():
    rec = _sample()
    parts = serialize_stb(rec).split("\t", 4)
    assert parts == [
        str(rec.msg_time),
        rec.user_account,
        str(rec.user_mac_address),
        str(rec.server_ip),
        rec.msg_content,
    ]


def test_content_is_kept_verbatim():
    rec = _sample()
    line = serialize_stb(rec)
    assert line.endswith(rec.msg_content)
    assert json.loads(line.split("\t", 4)[4]) == json.loads(rec.msg_content)


def test_long_content_not_truncated():
    rec = _sample()
    rec.msg_content = json.dumps({"data": "x" * 100000})
    assert serialize_stb(rec).split("\t", 4)[4] == rec.msg_content


def test_empty_account_gives_empty_column():
    rec = _sample()
    rec.user_account = ""
    parts = serialize_stb(rec).split("\t", 4)
    assert parts[1] == ""
    assert parts[0] == str(rec.msg_time)


def test_empty_content_ends_with_tab():
    line = serialize_stb(StbRecord())
    assert line.endswith("\t")
    assert line.count("\t") == 4