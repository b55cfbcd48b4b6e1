"""PPPoE signalling frame decoding."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from enum import IntEnum

ETHERTYPE_PPPOE_DISCOVERY = 0x8863
ETHERTYPE_PPPOE_SESSION = 0x8864
_VLAN_ETHERTYPES = (0x8100, 0x88A8)

TAG_SERVICE_NAME = 0x0101
TAG_AC_NAME = 0x0102

_ETH_HEADER_LEN = 14
_PPPOE_HEADER = struct.Struct("!BBHH")
_TAG_HEADER = struct.Struct("!HH")
_NAME_LIMIT = 63


class PPPoEEventType(IntEnum):
    """Kind of PPPoE frame seen."""

    UNKNOWN = 0
    PADI = 1
    PADO = 2
    PADR = 3
    PADS = 4
    PADT = 5
    SESSION = 6


_DISCOVERY_CODES = {
    0x09: PPPoEEventType.PADI,
    0x07: PPPoEEventType.PADO,
    0x19: PPPoEEventType.PADR,
    0x65: PPPoEEventType.PADS,
    0xA7: PPPoEEventType.PADT,
}


@dataclass
class PPPoERecord:
    """One decoded PPPoE event."""

    event_time: int = 0
    event_type: PPPoEEventType = PPPoEEventType.UNKNOWN
    client_mac: int = 0
    server_mac: int = 0
    session_id: int = 0
    ac_name: str = ""
    service_name: str = ""
    user_account: str = ""


def mac_to_int(mac) -> int:
    """Six MAC address bytes as a big-endian integer."""
    raw = bytes(mac)
    if len(raw) != 6:
        raise ValueError(f"MAC address must be 6 bytes, got {len(raw)}")
    return int.from_bytes(raw, "big")


def _tag_text(value: bytes) -> str:
    value = value.split(b"\0", 1)[0][:_NAME_LIMIT]
    return value.decode("utf-8", errors="replace")


def _discovery_tags(payload: bytes) -> dict[int, bytes]:
    """Map each tag type to the value of its first occurrence."""
    tags: dict[int, bytes] = {}
    pos = 0
    while pos + _TAG_HEADER.size <= len(payload):
        tag_type, tag_len = _TAG_HEADER.unpack_from(payload, pos)
        start = pos + _TAG_HEADER.size
        end = start + tag_len
        if end > len(payload):
            break
        tags.setdefault(tag_type, payload[start:end])
        pos = end
    return tags


def parse_pppoe(frame, ts_us: int) -> PPPoERecord | None:
    """Decode a PPPoE Ethernet frame; None when it is not PPPoE.

    The source MAC is taken as the client, the destination as the server.
    """
    data = bytes(frame)
    if len(data) < _ETH_HEADER_LEN:
        return None

    server_mac = mac_to_int(data[0:6])
    client_mac = mac_to_int(data[6:12])
    ethertype = int.from_bytes(data[12:14], "big")
    offset = _ETH_HEADER_LEN
    while ethertype in _VLAN_ETHERTYPES and offset + 4 <= len(data):
        ethertype = int.from_bytes(data[offset + 2:offset + 4], "big")
        offset += 4

    if ethertype not in (ETHERTYPE_PPPOE_DISCOVERY, ETHERTYPE_PPPOE_SESSION):
        return None
    if offset + _PPPOE_HEADER.size > len(data):
        return None

    _, code, session_id, length = _PPPOE_HEADER.unpack_from(data, offset)
    record = PPPoERecord(event_time=ts_us, client_mac=client_mac,
                         server_mac=server_mac, session_id=session_id)

    if ethertype == ETHERTYPE_PPPOE_SESSION:
        record.event_type = PPPoEEventType.SESSION
        return record

    record.event_type = _DISCOVERY_CODES.get(code, PPPoEEventType.UNKNOWN)
    body_start = offset + _PPPOE_HEADER.size
    tags = _discovery_tags(data[body_start:body_start + length])
    record.ac_name = _tag_text(tags.get(TAG_AC_NAME, b""))
    record.service_name = _tag_text(tags.get(TAG_SERVICE_NAME, b""))
    return record