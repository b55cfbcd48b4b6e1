from brascollect.radius_serializer import RadiusRecord, serialize_radius


def _columns(record):
    return serialize_radius(record).split("\t")


def test_field_count_is_55():
    assert len(_columns(RadiusRecord())) == 55


def test_no_trailing_tab():
    line = serialize_radius(RadiusRecord(acct_ipv6_output_gigawords=9))
    assert line.endswith("\t9")
    assert not line.endswith("\t\t")


def test_times_use_six_decimals():
    cols = _columns(RadiusRecord(start_time=1623319927.25, end_time=3))
    assert cols[2] == "1623319927.250000"
    assert cols[3] == "3.000000"


def test_empty_strings_are_empty_not_none():
    cols = _columns(RadiusRecord())
    for index in (9, 15, 18, 20, 21, 26, 35, 36, 40):
        assert cols[index] == ""
    assert "NONE" not in serialize_radius(RadiusRecord())


def test_zero_numbers_are_written():
    cols = _columns(RadiusRecord())
    assert cols[0] == "0"
    assert cols[-1] == "0"


def test_user_and_codes_positions():
    rec = RadiusRecord(request_code=1, reply_code=2, user_name="alice",
                       nas_port_id="trunk 2/0/12:32.582", onu_no="ONU0001",
                       pon_board=3, pon_port=4)
    cols = _columns(rec)
    assert cols[7] == "1"
    assert cols[8] == "2"
    assert cols[9] == "alice"
    assert cols[36] == "trunk 2/0/12:32.582"
    assert cols[38:41] == ["3", "4", "ONU0001"]


def test_large_mac_written_unsigned():
    mac = 0xFFFFFFFFFFFF
    cols = _columns(RadiusRecord(bras_mac=mac))
    assert int(cols[6]) == mac


def test_u16_field_is_masked():
    cols = _columns(RadiusRecord(pon_board=0x10005))
    assert cols[38] == "5"