"""RADIUS transaction record and its 55-field DCS line format."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class RadiusRecord:
    """One RADIUS request/reply exchange."""

    hour_round_time: int = 0
    min_round_time: int = 0
    start_time: float = 0.0
    end_time: float = 0.0
    bras_ip: int = 0
    radius_server_ip: int = 0
    bras_mac: int = 0
    request_code: int = 0
    reply_code: int = 0
    user_name: str = ""
    nas_ip: int = 0
    nas_port: int = 0
    service_type: int = 0
    framed_protocol: int = 0
    framed_ip: int = 0
    reply_message: str = ""
    session_timeout: int = 0
    idle_timeout: int = 0
    calling_station_id: str = ""
    calling_station_id_int: int = 0
    called_station_id: str = ""
    nas_identifier: str = ""
    acct_status_type: int = 0
    acct_delay_time: int = 0
    acct_input_octets: int = 0
    acct_output_octets: int = 0
    acct_session_id: str = ""
    acct_authen: int = 0
    acct_session_time: int = 0
    acct_input_packets: int = 0
    acct_output_packets: int = 0
    acct_terminate_cause: int = 0
    acct_input_gigawords: int = 0
    acct_output_gigawords: int = 0
    nas_port_type: int = 0
    connect_info: str = ""
    nas_port_id: str = ""
    olt_ip: int = 0
    pon_board: int = 0
    pon_port: int = 0
    onu_no: str = ""
    nat_public_ip: int = 0
    nat_start_port: int = 0
    nat_end_port: int = 0
    ul_band_limits: int = 0
    dl_band_limits: int = 0
    framed_ipv6_prefix: int = 0
    ipv6_prefix_length: int = 0
    framed_interface_id: int = 0
    delegated_ipv6_prefix: int = 0
    delegated_ipv6_prefix_length: int = 0
    acct_ipv6_input_octets: int = 0
    acct_ipv6_input_gigawords: int = 0
    acct_ipv6_output_octets: int = 0
    acct_ipv6_output_gigawords: int = 0


def _u16(value) -> str:
    return str(int(value) & 0xFFFF)


def _u32(value) -> str:
    return str(int(value) & 0xFFFFFFFF)


def _u64(value) -> str:
    return str(int(value) & 0xFFFFFFFFFFFFFFFF)


def serialize_radius(record: RadiusRecord) -> str:
    """Return the tab-separated line for a RADIUS record (no newline).

    Empty strings are written as empty columns, never as NONE.
    """
    r = record
    return "\t".join((
        _u32(r.hour_round_time),
        _u32(r.min_round_time),
        f"{float(r.start_time):.6f}",
        f"{float(r.end_time):.6f}",
        _u32(r.bras_ip),
        _u32(r.radius_server_ip),
        _u64(r.bras_mac),
        _u16(r.request_code),
        _u16(r.reply_code),
        r.user_name,
        _u32(r.nas_ip),
        _u32(r.nas_port),
        _u32(r.service_type),
        _u32(r.framed_protocol),
        _u32(r.framed_ip),
        r.reply_message,
        _u32(r.session_timeout),
        _u32(r.idle_timeout),
        r.calling_station_id,
        _u64(r.calling_station_id_int),
        r.called_station_id,
        r.nas_identifier,
        _u32(r.acct_status_type),
        _u32(r.acct_delay_time),
        _u32(r.acct_input_octets),
        _u32(r.acct_output_octets),
        r.acct_session_id,
        _u32(r.acct_authen),
        _u32(r.acct_session_time),
        _u32(r.acct_input_packets),
        _u32(r.acct_output_packets),
        _u32(r.acct_terminate_cause),
        _u32(r.acct_input_gigawords),
        _u32(r.acct_output_gigawords),
        _u32(r.nas_port_type),
        r.connect_info,
        r.nas_port_id,
        _u32(r.olt_ip),
        _u16(r.pon_board),
        _u16(r.pon_port),
        r.onu_no,
        _u32(r.nat_public_ip),
        _u16(r.nat_start_port),
        _u16(r.nat_end_port),
        _u32(r.ul_band_limits),
        _u32(r.dl_band_limits),
        _u64(r.framed_ipv6_prefix),
        _u16(r.ipv6_prefix_length),
        _u64(r.framed_interface_id),
        _u64(r.delegated_ipv6_prefix),
        _u16(r.delegated_ipv6_prefix_length),
        _u32(r.acct_ipv6_input_octets),
        _u32(r.acct_ipv6_input_gigawords),
        _u32(r.acct_ipv6_output_octets),
        _u32(r.acct_ipv6_output_gigawords),
    ))