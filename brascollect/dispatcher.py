"""Classification of captured frames and their distribution to rings."""

from __future__ import annotations

import logging
import queue
import time
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Iterable, Optional, Protocol, Sequence

log = logging.getLogger(__name__)

ETHERTYPE_IPV4 = 0x0800
ETHERTYPE_PPPOE_DISCOVERY = 0x8863
ETHERTYPE_PPPOE_SESSION = 0x8864
_VLAN_ETHERTYPES = (0x8100, 0x88A8)

_ETH_HEADER_LEN = 14
_IPV4_HEADER_LEN = 20
_UDP_HEADER_LEN = 8
_IPPROTO_UDP = 17

# Auth, accounting and change-of-authorisation ports.
RADIUS_PORTS = frozenset((1812, 1813, 3799))

_KNUTH_MULTIPLIER = 2654435761
_WARN_INTERVAL_SEC = 1.0


class PktType(Enum):
    """Category a frame is dispatched by."""

    RADIUS = auto()
    PPPOE = auto()
    USER = auto()
    INVALID = auto()


class Ring(Protocol):
    """A bounded queue: ``put_nowait`` raises ``queue.Full`` when full."""

    def put_nowait(self, item) -> None: ...


@dataclass
class DispatchConfig:
    """Dispatcher settings; addresses are host-order integers."""

    bras_network: int = 0
    bras_netmask: int = 0
    radius_server_ips: list[int] = field(default_factory=list)
    radius_port: int = 1812
    nb_worker_queues: int = 1


@dataclass
class Packet:
    """A captured Ethernet frame with the NIC's RSS hash, if it computed one."""

    data: bytes
    rss_hash: Optional[int] = None


def _skip_vlans(data: bytes, ethertype: int, offset: int) -> tuple[int, int]:
    """Step over 802.1Q / QinQ tags; return the inner EtherType and offset."""
    while ethertype in _VLAN_ETHERTYPES and offset + 4 <= len(data):
        ethertype = int.from_bytes(data[offset + 2:offset + 4], "big")
        offset += 4
    return ethertype, offset


class FlowDispatcher:
    """Splits bursts of frames into RADIUS, PPPoE and per-worker user traffic.

    A burst is expected to come from a single receiving thread; the
    counters may be read from any thread.
    """

    def __init__(self, config: DispatchConfig,
                 radius_ring: Optional[Ring] = None,
                 pppoe_ring: Optional[Ring] = None,
                 worker_rings: Iterable[Ring] = ()) -> None:
        self.config = config
        self.radius_ring = radius_ring
        self.pppoe_ring = pppoe_ring
        self.worker_rings: list[Ring] = list(worker_rings)

        self.radius_count = 0
        self.pppoe_count = 0
        self.user_count = 0
        self.drop_count = 0
        self._last_warn = float("-inf")

    def dispatch_burst(self, packets: Sequence[Packet]) -> int:
        """Send each packet to its ring; return how many were dropped."""
        nb_workers = len(self.worker_rings)
        batches: list[list[Packet]] = [[] for _ in range(nb_workers)]
        dropped = 0

        for packet in packets:
            kind = self.classify(packet)

            if kind is PktType.RADIUS and self.radius_ring is not None:
                try:
                    self.radius_ring.put_nowait(packet)
                except queue.Full:
                    dropped += 1
                    log.warning("[Dispatcher] radius_ring full, dropped 1 pkt")
                else:
                    self.radius_count += 1
                continue

            if kind is PktType.PPPOE and self.pppoe_ring is not None:
                try:
                    self.pppoe_ring.put_nowait(packet)
                except queue.Full:
                    dropped += 1
                else:
                    self.pppoe_count += 1
                continue

            if kind is PktType.INVALID:
                dropped += 1
                continue

            # User traffic, or signalling without a dedicated ring.
            if nb_workers > 0:
                batches[self.select_worker(packet)].append(packet)
                self.user_count += 1
            else:
                dropped += 1

        for wid, (ring, batch) in enumerate(zip(self.worker_rings, batches)):
            enqueued = 0
            for packet in batch:
                try:
                    ring.put_nowait(packet)
                except queue.Full:
                    break
                enqueued += 1
            lost = len(batch) - enqueued
            if lost:
                dropped += lost
                now = time.monotonic()
                if now - self._last_warn > _WARN_INTERVAL_SEC:
                    log.warning("[Dispatcher] worker_ring[%d] full, dropped %d pkts",
                                wid, lost)
                    self._last_warn = now

        self.drop_count += dropped
        return dropped

    def classify(self, packet: Packet) -> PktType:
        """Decide which category a frame belongs to."""
        data = packet.data
        if len(data) < _ETH_HEADER_LEN:
            return PktType.INVALID

        ethertype = int.from_bytes(data[12:14], "big")
        if ethertype == ETHERTYPE_PPPOE_DISCOVERY:
            return PktType.PPPOE

        ethertype, offset = _skip_vlans(data, ethertype, _ETH_HEADER_LEN)
        if ethertype == ETHERTYPE_PPPOE_SESSION:
            return PktType.PPPOE
        if ethertype != ETHERTYPE_IPV4:
            return PktType.USER

        if offset + _IPV4_HEADER_LEN > len(data):
            return PktType.INVALID

        ip_proto = data[offset + 9]
        src_ip = int.from_bytes(data[offset + 12:offset + 16], "big")
        dst_ip = int.from_bytes(data[offset + 16:offset + 20], "big")
        offset += (data[offset] & 0x0F) * 4

        if ip_proto != _IPPROTO_UDP:
            return PktType.USER
        if offset + _UDP_HEADER_LEN > len(data):
            return PktType.USER

        src_port = int.from_bytes(data[offset:offset + 2], "big")
        dst_port = int.from_bytes(data[offset + 2:offset + 4], "big")
        if src_port in RADIUS_PORTS or dst_port in RADIUS_PORTS:
            if self.is_radius_server(src_ip) or self.is_radius_server(dst_ip):
                return PktType.RADIUS
        return PktType.USER

    def select_worker(self, packet: Packet) -> int:
        """Worker index for a frame; both directions of a flow get the same one."""
        nb_workers = len(self.worker_rings)
        if nb_workers <= 1:
            return 0
        if packet.rss_hash is not None:
            return packet.rss_hash % nb_workers

        data = packet.data
        offset = _ETH_HEADER_LEN
        if len(data) < offset + _IPV4_HEADER_LEN:
            return 0

        ethertype = int.from_bytes(data[12:14], "big")
        ethertype, offset = _skip_vlans(data, ethertype, offset)
        if ethertype != ETHERTYPE_IPV4 or offset + _IPV4_HEADER_LEN > len(data):
            return 0

        # Addresses and ports are taken as raw words read on a little-endian host.
        src_ip = int.from_bytes(data[offset + 12:offset + 16], "little")
        dst_ip = int.from_bytes(data[offset + 16:offset + 20], "little")
        offset += (data[offset] & 0x0F) * 4

        src_port = dst_port = 0
        if offset + 4 <= len(data):
            src_port = int.from_bytes(data[offset:offset + 2], "little")
            dst_port = int.from_bytes(data[offset + 2:offset + 4], "little")

        h = (src_ip ^ dst_ip) ^ (((src_port ^ dst_port) << 16) & 0xFFFFFFFF)
        h = (h * _KNUTH_MULTIPLIER) & 0xFFFFFFFF
        return h % nb_workers

    def is_radius_server(self, ip: int) -> bool:
        """True when ``ip`` (host order) is a configured RADIUS server."""
        return ip in self.config.radius_server_ips