"""ONU soft-probe record and its 356-field DCS line format."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Iterable, TypeVar

ONU_MAX_WIFI = 4
ONU_MAX_WAN = 4
ONU_MAX_SUBDEV = 16

# Columns written for a sub-device slot that holds no device.
NONE_SUBDEVICE = "NONE\tNONE\tNONE\t0\tNONE\t0\t0\tNONE\t0\t0\t0\t0\t0\t0\tNONE"

T = TypeVar("T")


@dataclass
class OnuWifiInfo:
    """One SSID as reported by the ONU."""

    ssid_mac: int = 0
    channel: int = 0
    ssid_id: int = 0
    ssid_enabled: int = 0
    ssid_standard: str = ""
    ssid_name: str = ""
    ssid_advertisement: int = 0
    ssid_encryption_mode: str = ""
    noise_level: int = 0
    interf_percent: int = 0
    transmit_power: int = 0


@dataclass
class OnuWanTraffic:
    """Traffic counters of one WAN connection."""

    index: int = 0
    name: str = ""
    avg_rx_rate: float = 0.0
    avg_tx_rate: float = 0.0
    down_stats: int = 0
    max_rx_rate: float = 0.0
    max_tx_rate: float = 0.0
    up_stats: int = 0


@dataclass
class OnuSubDevice:
    """A device attached to the ONU; ``valid`` False marks an empty slot."""

    valid: bool = False
    name: str = ""
    type: str = ""
    mac: int = 0
    wlan_radio_type: str = ""
    wlan_radio_power: int = 0
    ip: int = 0
    lan_port: str = ""
    avg_rx_rate: float = 0.0
    avg_tx_rate: float = 0.0
    down_stats: int = 0
    max_rx_rate: float = 0.0
    max_tx_rate: float = 0.0
    up_stats: int = 0
    speed: int = 0
    duplex: str = ""


@dataclass
class OnuRecord:
    """One ONU soft-probe report."""

    hour_round_time: int = 0
    min_round_time: int = 0
    start_time: int = 0
    user_account: str = ""
    user_mac_addr: int = 0
    device_id: str = ""
    event_code: int = 0
    sub_event: int = 0
    warning_reason: str = ""
    warning_cpu_rate: int = 0
    cpu_type: str = ""
    firmware_version: str = ""
    flash_size: int = 0
    hardware_version: str = ""
    onu_mac: int = 0
    manufacturer: str = ""
    model: str = ""
    nfc_support: str = ""
    ram_size: int = 0
    wifi: list[OnuWifiInfo] = field(
        default_factory=lambda: [OnuWifiInfo() for _ in range(ONU_MAX_WIFI)])
    boot_time: str = ""
    cpu: int = 0
    lan1_connect_status: str = ""
    lan2_connect_status: str = ""
    lan3_connect_status: str = ""
    lan4_connect_status: str = ""
    lan_ip: int = 0
    pppoe_error: str = ""
    pppoe_status: str = ""
    pppoe_up_time: int = 0
    ram: int = 0
    running_time: int = 0
    sample_time: str = ""
    user_name: str = ""
    wan_connect_status: str = ""
    wan_ip: int = 0
    wan_ipv6: str = ""
    wifi_status: str = ""
    pon_rx_power: float = 0.0
    pon_tx_power: float = 0.0
    wan: list[OnuWanTraffic] = field(
        default_factory=lambda: [OnuWanTraffic() for _ in range(ONU_MAX_WAN)])
    sub_device_number: int = 0
    sub_devices: list[OnuSubDevice] = field(
        default_factory=lambda: [OnuSubDevice() for _ in range(ONU_MAX_SUBDEV)])


def _unsigned(value, bits: int) -> str:
    return str(int(value) & ((1 << bits) - 1))


def _signed(value, bits: int) -> str:
    span = 1 << bits
    raw = int(value) & (span - 1)
    return str(raw - span if raw >= span >> 1 else raw)


def _dbl(value) -> str:
    return f"{float(value):.6f}"


def _fixed(items: Iterable[T], count: int, factory: Callable[[], T]) -> list[T]:
    """Exactly ``count`` items: extras dropped, missing ones defaulted."""
    chosen = list(items)[:count]
    return chosen + [factory() for _ in range(count - len(chosen))]


def _wifi_columns(w: OnuWifiInfo) -> list[str]:
    return [
        _unsigned(w.ssid_mac, 64),
        _unsigned(w.channel, 16),
        _unsigned(w.ssid_id, 16),
        _unsigned(w.ssid_enabled, 8),
        w.ssid_standard,
        w.ssid_name,
        _unsigned(w.ssid_advertisement, 8),
        w.ssid_encryption_mode,
        _signed(w.noise_level, 16),
        _unsigned(w.interf_percent, 16),
        _unsigned(w.transmit_power, 16),
    ]


def _wan_columns(w: OnuWanTraffic) -> list[str]:
    return [
        _unsigned(w.index, 16),
        w.name,
        _dbl(w.avg_rx_rate),
        _dbl(w.avg_tx_rate),
        _unsigned(w.down_stats, 64),
        _dbl(w.max_rx_rate),
        _dbl(w.max_tx_rate),
        _unsigned(w.up_stats, 64),
    ]


def _sub_device_columns(d: OnuSubDevice) -> list[str]:
    if not d.valid:
        return NONE_SUBDEVICE.split("\t")
    return [
        d.name,
        d.type,
        _unsigned(d.mac, 64),
        d.wlan_radio_type,
        _signed(d.wlan_radio_power, 32),
        _unsigned(d.ip, 32),
        d.lan_port,
        _dbl(d.avg_rx_rate),
        _dbl(d.avg_tx_rate),
        _unsigned(d.down_stats, 64),
        _dbl(d.max_rx_rate),
        _dbl(d.max_tx_rate),
        _unsigned(d.up_stats, 64),
        _unsigned(d.speed, 32),
        d.duplex,
    ]


def serialize_onu(record: OnuRecord) -> str:
    """Return the tab-separated line for an ONU report (no newline).

    Empty strings are written as empty columns; all sixteen sub-device
    slots are always written, empty ones as the NONE placeholder.
    """
    r = record
    columns = [
        _unsigned(r.hour_round_time, 32),
        _unsigned(r.min_round_time, 32),
        _unsigned(r.start_time, 32),
        r.user_account,
        _unsigned(r.user_mac_addr, 64),
        r.device_id,
        _unsigned(r.event_code, 16),
        _unsigned(r.sub_event, 16),
        r.warning_reason,
        _unsigned(r.warning_cpu_rate, 16),
        r.cpu_type,
        r.firmware_version,
        _unsigned(r.flash_size, 16),
        r.hardware_version,
        _unsigned(r.onu_mac, 64),
        r.manufacturer,
        r.model,
        r.nfc_support,
        _unsigned(r.ram_size, 16),
    ]
    for wifi in _fixed(r.wifi, ONU_MAX_WIFI, OnuWifiInfo):
        columns += _wifi_columns(wifi)
    columns += [
        r.boot_time,
        _unsigned(r.cpu, 16),
        r.lan1_connect_status,
        r.lan2_connect_status,
        r.lan3_connect_status,
        r.lan4_connect_status,
        _unsigned(r.lan_ip, 32),
        r.pppoe_error,
        r.pppoe_status,
        _unsigned(r.pppoe_up_time, 32),
        _unsigned(r.ram, 16),
        _unsigned(r.running_time, 32),
        r.sample_time,
        r.user_name,
        r.wan_connect_status,
        _unsigned(r.wan_ip, 32),
        r.wan_ipv6,
        r.wifi_status,
        _dbl(r.pon_rx_power),
        _dbl(r.pon_tx_power),
    ]
    for wan in _fixed(r.wan, ONU_MAX_WAN, OnuWanTraffic):
        columns += _wan_columns(wan)
    columns.append(_unsigned(r.sub_device_number, 16))
    for device in _fixed(r.sub_devices, ONU_MAX_SUBDEV, OnuSubDevice):
        columns += _sub_device_columns(device)
    return "\t".join(columns)