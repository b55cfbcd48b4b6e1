"""Ping record and its 15-field DCS line format."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class PingRecord:
    """One ping exchange summary."""

    hour_round_time: int = 0
    min_round_time: int = 0
    start_time: float = 0.0
    end_time: float = 0.0
    user_mac_addr: int = 0
    bras_mac_addr: int = 0
    user_account: str = ""
    user_ip: int = 0
    server_ip: int = 0
    host_hash: int = 0
    host_name: str = ""
    request_count: int = 0
    response_count: int = 0
    total_duration: int = 0
    payload_size: int = 0


def serialize_ping(record: PingRecord) -> str:
    """Return the tab-separated line for a ping record (no newline).

    Empty strings are written as empty columns.
    """
    r = record
    return "\t".join((
        str(int(r.hour_round_time)),
        str(int(r.min_round_time)),
        f"{r.start_time:.6f}",
        f"{r.end_time:.6f}",
        str(int(r.user_mac_addr)),
        str(int(r.bras_mac_addr)),
        r.user_account,
        str(int(r.user_ip)),
        str(int(r.server_ip)),
        str(int(r.host_hash)),
        r.host_name,
        str(int(r.request_count)),
        str(int(r.response_count)),
        str(int(r.total_duration)),
        str(int(r.payload_size)),
    ))