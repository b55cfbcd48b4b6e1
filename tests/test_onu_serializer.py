from brascollect.onu_serializer import (
    NONE_SUBDEVICE,
    OnuRecord,
    OnuSubDevice,
    OnuWanTraffic,
    OnuWifiInfo,
    serialize_onu,
)

TOTAL_FIELDS = 356
SUBDEV_START = TOTAL_FIELDS - 16 * 15


def _columns(record):
    return serialize_onu(record).split("\t")


def test_default_record_has_all_fields():
    assert len(_columns(OnuRecord())) == TOTAL_FIELDS


def test_no_trailing_tab_or_newline():
    line = serialize_onu(OnuRecord())
    assert not line.endswith("\t")
    assert "\n" not in line


def test_empty_slots_use_none_placeholder():
    line = serialize_onu(OnuRecord())
    assert line.endswith(NONE_SUBDEVICE)
    cols = _columns(OnuRecord())
    placeholder = NONE_SUBDEVICE.split("\t")
    for slot in range(16):
        start = SUBDEV_START + slot * 15
        assert cols[start:start + 15] == placeholder


def test_header_fields_in_order():
    rec = OnuRecord(hour_round_time=1623315600, min_round_time=1623319920,
                    start_time=1623319927, user_account="user01",
                    user_mac_addr=42, device_id="dev-1", event_code=7)
    cols = _columns(rec)
    assert cols[:7] == ["1623315600", "1623319920", "1623319927",
                        "user01", "42", "dev-1", "7"]


def test_empty_string_is_empty_column():
    cols = _columns(OnuRecord(warning_reason=""))
    assert cols[8] == ""


def test_wifi_noise_level_is_signed():
    rec = OnuRecord(wifi=[OnuWifiInfo(noise_level=-90, ssid_name="home")])
    cols = _columns(rec)
    wifi0 = cols[19:30]
    assert wifi0[5] == "home"
    assert wifi0[8] == "-90"


def test_missing_wifi_entries_are_defaulted():
    short = _columns(OnuRecord(wifi=[]))
    full = _columns(OnuRecord())
    assert short == full


def test_wan_rates_use_six_decimals():
    rec = OnuRecord(wan=[OnuWanTraffic(index=1, name="INTERNET", avg_rx_rate=1.5)])
    cols = _columns(rec)
    wan_start = 19 + 44 + 20
    assert cols[wan_start:wan_start + 3] == ["1", "INTERNET", "1.500000"]


def test_valid_last_sub_device_has_no_trailing_tab():
    devices = [OnuSubDevice() for _ in range(15)]
    devices.append(OnuSubDevice(valid=True, name="phone", duplex="Full",
                                wlan_radio_power=-40))
    rec = OnuRecord(sub_device_number=1, sub_devices=devices)
    line = serialize_onu(rec)
    assert line.endswith("\tFull")
    cols = line.split("\t")
    assert len(cols) == TOTAL_FIELDS
    last = cols[-15:]
    assert last[0] == "phone"
    assert last[4] == "-40"
    assert cols[SUBDEV_START - 1] == "1"


def test_valid_sub_device_in_middle_keeps_field_count():
    devices = [OnuSubDevice(valid=True, name="tv", type="STB")]
    cols = _columns(OnuRecord(sub_devices=devices))
    assert len(cols) == TOTAL_FIELDS
    assert cols[SUBDEV_START:SUBDEV_START + 2] == ["tv", "STB"]