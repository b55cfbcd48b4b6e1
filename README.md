# brascollect

Building blocks for a BRAS traffic collector. The package has:

- record dataclasses and functions that turn each record into one
  tab-separated DCS line
- a buffered DCS file writer that starts a new file for each minute
- a manager that keeps one writer per record kind
- a PPPoE frame decoder
- a detector for CPE model and version in User-Agent strings
- detection of set-top-box soft-probe reports in HTTP requests
- a dispatcher that classifies Ethernet frames and hands them to rings

It has no dependencies outside the standard library.

## Installation

```
pip install .
```

To run the tests as well:

```
pip install .[test]
pytest
```

## Modules

### `brascollect.dcs_writer`

`DcsWriter(prefix, directory, collector_id)` creates `directory` if it does
not exist. `rotate(min_round_sec)` opens
`{prefix}_{YYYYMMDDTHHMMSS}{collector_id}.dcs`. The timestamp is in local
time. A call with the same minute as the current file does nothing.

`write_line(line)` takes `str` or bytes and adds a newline. Lines are held in
a 4 MiB buffer until `flush()` runs or the buffer fills. Lines written before
the first `rotate()` are dropped when the buffer is flushed.

`close()` closes the current file. `current_path` and `line_count` report on
the current file. The writer is a context manager; on exit it flushes and
closes. It is not thread safe.

### Serializers

Each function returns one line without a trailing newline.

| Module | Record | Function | Empty strings become |
|---|---|---|---|
| `tcp_serializer` | `TcpSessionRecord` | `serialize_tcp` (39 columns) | `NONE` for the account, empty for the host name |
| `http_serializer` | `HttpRecord` | `serialize_http` | `NONE`. Tabs and newlines inside text become spaces |
| `ping_serializer` | `PingRecord` | `serialize_ping` (15 columns) | empty |
| `stb_serializer` | `StbRecord` | `serialize_stb` (5 columns) | empty. The JSON content is appended unchanged |
| `radius_serializer` | `RadiusRecord` | `serialize_radius` (55 columns) | empty |
| `onu_serializer` | `OnuRecord` | `serialize_onu` (356 columns) | empty |

In these serializers, floating-point times have six decimals.

`OnuRecord` has these parts:

- four `OnuWifiInfo` entries
- four `OnuWanTraffic` entries
- sixteen `OnuSubDevice` slots

A slot whose `valid` is false is written as a fixed `NONE`/`0` placeholder.

### `brascollect.pppoe`

`parse_pppoe(frame, ts_us)` decodes a raw Ethernet frame and returns a
`PPPoERecord`. It skips 802.1Q and QinQ tags first. It returns `None` for
frames that are not PPPoE or are too short.

- **Discovery frames** set `event_type` to one of PADI, PADO, PADR, PADS or
  PADT (a `PPPoEEventType`), or `UNKNOWN` for another code. They also fill
  `ac_name` and `service_name` from the AC-Name and Service-Name tags.
- **Session frames** set `event_type` to `SESSION`.

The source MAC is stored as `client_mac` and the destination MAC as
`server_mac`.

`mac_to_int(mac)` turns six bytes into an integer. It raises `ValueError` for
any other length.

### `brascollect.raw_file_manager`

`RawFileManager(raw_dir, collector_id, now=None)` opens one writer for each
of these prefixes:

- `http`
- `tcp`
- `radius`
- `onu`
- `dns`
- `udp`
- `pppoe`
- `ping`
- `cmcc_stb`

All writers start at the current minute.

The write methods each serialize a record and append it under a per-kind
lock:

- `write_http`, `write_tcp`, `write_radius`, `write_onu`
- `write_dns`, `write_udp`, `write_pppoe`, `write_ping`, `write_stb`

The other methods are:

- `rotate_if_needed(min_round_sec)` moves every writer to a later minute. An
  earlier or equal minute is ignored.
- `flush_all()` flushes every writer.
- `shutdown()` flushes and closes every writer. Leaving the context manager
  does the same.

The same module defines `DnsRecord` with `serialize_dns` and
`UdpStreamRecord` with `serialize_udp`. It also defines `serialize_pppoe` for
`PPPoERecord`.

### `brascollect.cpe_detector`

`CpeDetector().detect(user_agent)` returns a `CpeInfo(model, version)`. It
recognises these User-Agent forms:

- Dalvik/Android
- Mozilla/Android
- iPhone/iPad
- `app/version`
- TR069Client

The first rule that matches wins. Unknown values are `"NONE"`.

### `brascollect.stb_detector`

Functions that work on an `HttpRequest(method, url, user_agent, body)`:

- **`is_stb_report(request)`** is true for a POST that matches any of these:
  - its URL contains `/family/`, `/stb/` or `/cmcc/`
  - its User-Agent names a soft probe
  - its body has STB report keys
- **`has_stb_json_feature(body)`** checks the body for those keys.
- **`extract_mac_from_json(body)`** reads `deviceInfo.macaddress`. It returns
  0 if the MAC is not found.
- **`build_record(request, ts_us, user_mac, server_ip, user_account)`**
  returns a `StbRecord`, or `None` when the body is empty. A zero `user_mac`
  is replaced by the MAC found in the body.

### `brascollect.dispatcher`

`FlowDispatcher(config, radius_ring=None, pppoe_ring=None, worker_rings=())`
classifies `Packet(data, rss_hash=None)` frames into `PktType` values:

- `RADIUS`: UDP on ports 1812, 1813 or 3799, to or from an address in
  `DispatchConfig.radius_server_ips`
- `PPPOE`
- `USER`
- `INVALID`

A ring is anything with `put_nowait` that raises `queue.Full`, such as
`queue.Queue(maxsize=...)`.

RADIUS and PPPoE frames that have no ring of their own are treated as user
traffic. User traffic goes to a worker ring chosen by `select_worker`. That
method uses `rss_hash` when it is set. Otherwise it uses a symmetric hash of
the addresses and ports, so both directions of a flow reach the same worker.

`dispatch_burst(packets)` returns the number of dropped frames. A frame is
dropped when it is invalid, when there is no ring for it, or when its ring is
full. The counters `radius_count`, `pppoe_count`, `user_count` and
`drop_count` add up over every call.

## Example

```python
import queue

from brascollect.dispatcher import DispatchConfig, FlowDispatcher, Packet
from brascollect.ping_serializer import PingRecord
from brascollect.raw_file_manager import RawFileManager

with RawFileManager("/tmp/raw", "01") as manager:
    manager.write_ping(PingRecord(user_ip=167772161, host_name="example.com"))

workers = [queue.Queue(maxsize=1024) for _ in range(2)]
dispatcher = FlowDispatcher(DispatchConfig(radius_server_ips=[167772170]),
                            worker_rings=workers)
dropped = dispatcher.dispatch_burst([Packet(b"\x00" * 12 + b"\x86\xdd" + b"\x00" * 40)])
```

## What the package does not do

- It does not capture packets from a network interface.
- It has no command-line program.
- It runs no receive, worker or output threads.
- It does not parse RADIUS attributes or DNS messages into records, and it
  does not track TCP or HTTP sessions. The RADIUS, DNS, TCP and HTTP records
  must be filled in by the caller.