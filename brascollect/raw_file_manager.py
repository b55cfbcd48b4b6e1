"""Routes every record kind to its own minute-rotated DCS file."""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from .dcs_writer import DcsWriter
from .http_serializer import HttpRecord, serialize_http
from .onu_serializer import OnuRecord, serialize_onu
from .ping_serializer import PingRecord, serialize_ping
from .pppoe import PPPoERecord
from .radius_serializer import RadiusRecord, serialize_radius
from .stb_serializer import StbRecord, serialize_stb
from .tcp_serializer import TcpSessionRecord, serialize_tcp

log = logging.getLogger(__name__)


@dataclass
class DnsRecord:
    """One DNS query/response pair."""

    query_time: int = 0
    user_ip: int = 0
    dns_server_ip: int = 0
    query_name: str = ""
    query_type: int = 0
    result_code: int = 0
    response_duration_us: int = 0
    answers: str = ""


@dataclass
class UdpStreamRecord:
    """One UDP stream summary."""

    start_time: int = 0
    user_ip: int = 0
    server_ip: int = 0
    user_port: int = 0
    server_port: int = 0
    ndpi_app_proto: int = 0
    traffic_type: int = 0
    expected_pkts: int = 0
    received_pkts: int = 0
    loss_rate: float = 0.0
    duration_ms: int = 0


def serialize_dns(record: DnsRecord) -> str:
    """Eight tab-separated columns; empty name or answers become NONE."""
    r = record
    return "\t".join((
        str(int(r.query_time)),
        str(int(r.user_ip)),
        str(int(r.dns_server_ip)),
        r.query_name or "NONE",
        str(int(r.query_type)),
        str(int(r.result_code)),
        str(int(r.response_duration_us)),
        r.answers or "NONE",
    ))


def serialize_udp(record: UdpStreamRecord) -> str:
    """Eleven tab-separated columns; the loss rate has four decimals."""
    r = record
    return "\t".join((
        str(int(r.start_time)),
        str(int(r.user_ip)),
        str(int(r.server_ip)),
        str(int(r.user_port)),
        str(int(r.server_port)),
        str(int(r.ndpi_app_proto)),
        str(int(r.traffic_type)),
        str(int(r.expected_pkts)),
        str(int(r.received_pkts)),
        f"{float(r.loss_rate):.4f}",
        str(int(r.duration_ms)),
    ))


def serialize_pppoe(record: PPPoERecord) -> str:
    """Seven tab-separated columns; empty names become NONE."""
    r = record
    return "\t".join((
        str(int(r.event_time)),
        str(int(r.event_type)),
        str(int(r.client_mac)),
        str(int(r.server_mac)),
        str(int(r.session_id)),
        r.ac_name or "NONE",
        r.service_name or "NONE",
    ))


@dataclass
class _Slot:
    writer: DcsWriter
    lock: threading.Lock = field(default_factory=threading.Lock)


_PREFIXES = ("http", "tcp", "radius", "onu", "dns", "udp", "pppoe", "ping", "cmcc_stb")


class RawFileManager:
    """Owns one DcsWriter per record kind; each write is locked per kind."""

    def __init__(self, raw_dir, collector_id: str, now: float | None = None) -> None:
        self.raw_dir = Path(raw_dir)
        self.collector_id = collector_id
        self.raw_dir.mkdir(parents=True, exist_ok=True)

        current = int(time.time() if now is None else now)
        min_ts = current - current % 60
        self._last_min_ts = min_ts
        self._slots = {
            prefix: _Slot(DcsWriter(prefix, self.raw_dir, collector_id))
            for prefix in _PREFIXES
        }
        for slot in self._slots.values():
            slot.writer.rotate(min_ts)

    def _write(self, prefix: str, line: str) -> None:
        if not line:
            return
        slot = self._slots[prefix]
        with slot.lock:
            slot.writer.write_line(line)

    def _each(self, action: Callable[[DcsWriter], None]) -> None:
        for slot in self._slots.values():
            with slot.lock:
                action(slot.writer)

    def write_http(self, record: HttpRecord) -> None:
        self._write("http", serialize_http(record))

    def write_tcp(self, record: TcpSessionRecord) -> None:
        self._write("tcp", serialize_tcp(record))

    def write_radius(self, record: RadiusRecord) -> None:
        self._write("radius", serialize_radius(record))

    def write_onu(self, record: OnuRecord) -> None:
        self._write("onu", serialize_onu(record))

    def write_dns(self, record: DnsRecord) -> None:
        self._write("dns", serialize_dns(record))

    def write_udp(self, record: UdpStreamRecord) -> None:
        self._write("udp", serialize_udp(record))

    def write_pppoe(self, record: PPPoERecord) -> None:
        self._write("pppoe", serialize_pppoe(record))

    def write_ping(self, record: PingRecord) -> None:
        self._write("ping", serialize_ping(record))

    def write_stb(self, record: StbRecord) -> None:
        self._write("cmcc_stb", serialize_stb(record))

    def rotate_if_needed(self, min_round_sec: int) -> None:
        """Move every writer to a newer minute; older or equal minutes are ignored."""
        if min_round_sec <= self._last_min_ts:
            return
        log.info("[RawFileManager] rotating to min_ts=%d", min_round_sec)
        self._each(lambda writer: writer.rotate(min_round_sec))
        self._last_min_ts = min_round_sec

    def flush_all(self) -> None:
        self._each(lambda writer: writer.flush())

    def shutdown(self) -> None:
        self.flush_all()
        self._each(lambda writer: writer.close())

    def __enter__(self) -> "RawFileManager":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown()