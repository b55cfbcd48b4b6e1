"""HTTP session record and its tab-separated DCS line format."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class HttpRecord:
    """One HTTP session summary."""

    hour_round_time: int = 0
    min_round_time: int = 0
    start_time: float = 0.0
    user_account: str = ""
    user_mac_addr: int = 0
    bras_mac_addr: int = 0
    user_ip: int = 0
    server_ip: int = 0
    user_port: int = 0
    server_port: int = 0
    request_type: int = 0
    status_code: int = 0
    host_hash: int = 0
    host_name: str = ""
    cpe_model: str = ""
    cpe_version: str = ""
    user_agent: str = ""
    client_content_type: str = ""
    server_content_type: str = ""
    url: str = ""
    response_interval: int = 0
    handshake_status: int = 0
    socket_status: int = 0
    traffic_type: int = 0
    duration: int = 0
    ul_traffic: int = 0
    dl_traffic: int = 0
    http_ul_payload: int = 0
    http_dl_payload: int = 0
    server_rtt_count: int = 0
    server_rtt_sum: int = 0
    user_rtt_count: int = 0
    user_rtt_sum: int = 0
    user_jitter_sum: int = 0
    server_jitter_sum: int = 0
    server_loss: int = 0
    user_loss: int = 0
    ul_packets: int = 0
    dl_packets: int = 0
    user_launch: int = 0
    dl_repeat_packets: int = 0
    hs_user_rtt: int = 0
    hs_server_rtt: int = 0
    eff_duration: int = 0
    eff_ul_traffic: int = 0
    eff_dl_traffic: int = 0
    eff_ul_packets: int = 0
    eff_dl_packets: int = 0
    isdn1: int = 0
    isdn2: int = 0
    imsi1: int = 0
    imsi2: int = 0
    imei1: int = 0
    imei2: int = 0
    cpe_mac_addr1: int = 0
    cpe_mac_addr2: int = 0
    uplink_disorder_cnt: int = 0
    downlink_disorder_cnt: int = 0
    second_user_agent: str = ""


def _u(value) -> str:
    return str(int(value))


def _text(value: str) -> str:
    """Empty strings become NONE; embedded tabs and newlines become spaces."""
    if not value:
        return "NONE"
    return value.replace("\t", " ").replace("\n", " ")


def serialize_http(record: HttpRecord) -> str:
    """Return the tab-separated line for an HTTP session (no newline)."""
    r = record
    return "\t".join((
        _u(r.hour_round_time),
        _u(r.min_round_time),
        f"{r.start_time:.6f}",
        _text(r.user_account),
        _u(r.user_mac_addr),
        _u(r.bras_mac_addr),
        _u(r.user_ip),
        _u(r.server_ip),
        _u(r.user_port),
        _u(r.server_port),
        _u(r.request_type),
        _u(r.status_code),
        _u(r.host_hash),
        _text(r.host_name),
        _text(r.cpe_model),
        _text(r.cpe_version),
        _text(r.user_agent),
        _text(r.client_content_type),
        _text(r.server_content_type),
        _text(r.url),
        _u(r.response_interval),
        _u(r.handshake_status),
        _u(r.socket_status),
        _u(r.traffic_type),
        _u(r.duration),
        _u(r.ul_traffic),
        _u(r.dl_traffic),
        _u(r.http_ul_payload),
        _u(r.http_dl_payload),
        _u(r.server_rtt_count),
        _u(r.server_rtt_sum),
        _u(r.user_rtt_count),
        _u(r.user_rtt_sum),
        _u(r.user_jitter_sum),
        _u(r.server_jitter_sum),
        _u(r.server_loss),
        _u(r.user_loss),
        _u(r.ul_packets),
        _u(r.dl_packets),
        _u(r.user_launch),
        _u(r.dl_repeat_packets),
        _u(r.hs_user_rtt),
        _u(r.hs_server_rtt),
        _u(r.eff_duration),
        _u(r.eff_ul_traffic),
        _u(r.eff_dl_traffic),
        _u(r.eff_ul_packets),
        _u(r.eff_dl_packets),
        _u(r.isdn1),
        _u(r.isdn2),
        _u(r.imsi1),
        _u(r.imsi2),
        _u(r.imei1),
        _u(r.imei2),
        _u(r.cpe_mac_addr1),
        _u(r.cpe_mac_addr2),
        _u(r.uplink_disorder_cnt),
        _u(r.downlink_disorder_cnt),
        _text(r.second_user_agent),
    ))