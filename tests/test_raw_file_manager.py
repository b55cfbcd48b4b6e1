from pathlib import Path

from brascollect.pppoe import PPPoEEventType, PPPoERecord
from brascollect.raw_file_manager import (
    DnsRecord,
    RawFileManager,
    UdpStreamRecord,
    serialize_dns,
    serialize_pppoe,
    serialize_udp,
)
from brascollect.stb_serializer import StbRecord, serialize_stb
from brascollect.tcp_serializer import TcpSessionRecord, serialize_tcp

NOW = 1_700_000_040


def _files(directory: Path, prefix: str) -> list[Path]:
    return sorted(p for p in directory.iterdir()
                  if p.name.startswith(prefix + "_2") or p.name.startswith(prefix + "_1"))


def test_serialize_dns_empty_fields_become_none():
    line = serialize_dns(DnsRecord(query_time=5, user_ip=1, dns_server_ip=2))
    assert line.split("\t") == ["5", "1", "2", "NONE", "0", "0", "0", "NONE"]


def test_serialize_dns_keeps_values():
    rec = DnsRecord(query_name="example.com", query_type=1, answers="a,b")
    cols = serialize_dns(rec).split("\t")
    assert cols[3] == "example.com"
    assert cols[4] == "1"
    assert cols[7] == "a,b"


def test_serialize_udp_loss_rate_four_decimals():
    cols = serialize_udp(UdpStreamRecord(loss_rate=0.5, duration_ms=7)).split("\t")
    assert len(cols) == 11
    assert cols[9] == "0.5000"
    assert cols[10] == "7"


def test_serialize_pppoe_names():
    rec = PPPoERecord(event_time=9, event_type=PPPoEEventType.PADI,
                      session_id=3, ac_name="ac1")
    cols = serialize_pppoe(rec).split("\t")
    assert cols[0] == "9"
    assert cols[1] == "1"
    assert cols[4] == "3"
    assert cols[5:] == ["ac1", "NONE"]


def test_opens_one_file_per_kind(tmp_path):
    with RawFileManager(tmp_path, "01", now=NOW):
        pass
    names = {p.name.rsplit("_", 1)[0] for p in tmp_path.iterdir()}
    assert names == {"http", "tcp", "radius", "onu", "dns", "udp",
                     "pppoe", "ping", "cmcc_stb"}
    assert all(p.name.endswith("01.dcs") for p in tmp_path.iterdir())


def test_lines_written_to_matching_files(tmp_path):
    dns = DnsRecord(query_name="example.com")
    tcp = TcpSessionRecord(user_ip=10)
    stb = StbRecord(msg_time=1, msg_content='{"a":1}')
    with RawFileManager(tmp_path, "01", now=NOW) as mgr:
        mgr.write_dns(dns)
        mgr.write_dns(dns)
        mgr.write_tcp(tcp)
        mgr.write_stb(stb)
    (dns_file,) = _files(tmp_path, "dns")
    (tcp_file,) = _files(tmp_path, "tcp")
    (stb_file,) = _files(tmp_path, "cmcc_stb")
    assert dns_file.read_text() == (serialize_dns(dns) + "\n") * 2
    assert tcp_file.read_text() == serialize_tcp(tcp) + "\n"
    assert stb_file.read_text() == serialize_stb(stb) + "\n"


def test_rotation_only_moves_forward(tmp_path):
    mgr = RawFileManager(tmp_path, "", now=NOW)
    mgr.rotate_if_needed(NOW)
    mgr.rotate_if_needed(NOW - 60)
    assert len(_files(tmp_path, "udp")) == 1
    mgr.rotate_if_needed(NOW + 60)
    mgr.write_udp(UdpStreamRecord(user_port=80))
    mgr.shutdown()
    files = _files(tmp_path, "udp")
    assert len(files) == 2
    assert files[0].read_text() == ""
    assert files[1].read_text() == serialize_udp(UdpStreamRecord(user_port=80)) + "\n"


def test_flush_all_makes_lines_visible(tmp_path):
    mgr = RawFileManager(tmp_path, "", now=NOW)
    rec = PPPoERecord(event_time=1)
    mgr.write_pppoe(rec)
    mgr.flush_all()
    (path,) = _files(tmp_path, "pppoe")
    assert path.read_text() == serialize_pppoe(rec) + "\n"
    mgr.shutdown()