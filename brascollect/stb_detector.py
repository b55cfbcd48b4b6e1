"""Recognition of set-top-box soft-probe reports carried over HTTP."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from .stb_serializer import StbRecord

_SEARCH_LIMIT = 2048
_ACCOUNT_LIMIT = 255


class HttpMethod(Enum):
    """HTTP request method."""

    UNKNOWN = auto()
    GET = auto()
    POST = auto()
    HEAD = auto()
    PUT = auto()
    DELETE = auto()
    OPTIONS = auto()
    CONNECT = auto()
    TRACE = auto()
    PATCH = auto()


@dataclass
class HttpRequest:
    """The parts of an HTTP request the detector looks at."""

    method: HttpMethod = HttpMethod.UNKNOWN
    url: str = ""
    user_agent: str = ""
    body: str = ""


def has_stb_json_feature(body: str) -> bool:
    """True when the body holds a pair of keys typical of STB reports."""
    if not body or len(body) < 16:
        return False
    if "stbRunTime" in body and "deviceInfo" in body:
        return True
    return "tcpConnectInfo" in body and "voiceRegInfo" in body


def is_stb_report(request: HttpRequest) -> bool:
    """Quick check of method, URL, User-Agent and body for an STB report."""
    if request.method is not HttpMethod.POST:
        return False
    if any(part in request.url for part in ("/family/", "/stb/", "/cmcc/")):
        return True
    if any(tag in request.user_agent for tag in ("SoftDetector", "softprobe", "SoftProbe")):
        return True
    return has_stb_json_feature(request.body)


def _find_json_value(text: str, key: str) -> str | None:
    """Value following the first occurrence of ``key``, quoted or bare."""
    found = text.find(key)
    if found < 0:
        return None
    pos = found + len(key)
    while pos < len(text) and text[pos] in '": ':
        pos += 1
    if pos >= len(text):
        return None
    delim = '"' if text[pos] == '"' else ","
    start = pos + 1 if delim == '"' else pos
    end = start
    while end < len(text) and text[end] not in (delim, "}", "]"):
        end += 1
    return text[start:end]


def extract_mac_from_json(body: str) -> int:
    """MAC from ``deviceInfo.macaddress`` ("xx:xx:xx:xx:xx:xx"), or 0."""
    info_at = body.find("deviceInfo")
    if info_at < 0:
        return 0
    brace = body.find("{", info_at)
    if brace < 0:
        return 0
    mac_str = _find_json_value(body[brace:brace + _SEARCH_LIMIT], "macaddress")
    if mac_str is None or len(mac_str) < 17:
        return 0

    mac = 0
    idx = 0
    for i, char in enumerate(mac_str):
        if idx >= 6:
            break
        if char == ":":
            continue
        if char not in "0123456789abcdefABCDEF":
            break
        nibble = int(char, 16)
        if i % 3 == 0:
            mac |= nibble << (8 * (5 - idx) + 4)
        elif i % 3 == 1:
            mac |= nibble << (8 * (5 - idx))
            idx += 1
    return mac


def build_record(request: HttpRequest, ts_us: int, user_mac: int,
                 server_ip: int, user_account: str | None) -> StbRecord | None:
    """Build the report record; None when the request has no body.

    A zero ``user_mac`` is replaced by the MAC found in the JSON body.
    """
    if not request.body:
        return None
    mac = user_mac or extract_mac_from_json(request.body)
    return StbRecord(
        msg_time=(ts_us // 1_000_000) & 0xFFFFFFFF,
        user_account=(user_account or "")[:_ACCOUNT_LIMIT],
        user_mac_address=mac,
        server_ip=server_ip,
        msg_content=request.body,
    )