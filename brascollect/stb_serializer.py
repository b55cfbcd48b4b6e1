"""Set-top-box report record and its DCS line format."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class StbRecord:
    """One set-top-box soft-probe report."""

    msg_time: int = 0
    user_account: str = ""
    user_mac_address: int = 0
    server_ip: int = 0
    msg_content: str = ""


def serialize_stb(record: StbRecord) -> str:
    """Return the five-field line; the JSON content is appended unchanged."""
    r = record
    header = f"{int(r.msg_time)}\t{r.user_account}\t{int(r.user_mac_address)}\t{int(r.server_ip)}\t"
    return header + r.msg_content