import socket
import threading

import yaml

from ibeo import FrameHeader, DataType, HEADER_SIZE
from lux_tools import record
from lux_frames import pack_frame, pack_object, pack_object_payload, pack_scan_payload, OBJECT_DATA, SCAN_DATA

STREAM = (
    pack_frame(SCAN_DATA, pack_scan_payload([]))
    + pack_frame(OBJECT_DATA, pack_object_payload([pack_object(3, [(1, 1), (2, 2)])]))
)


class FakeDevice(threading.Thread):
    def __init__(self, data: bytes):
        super().__init__(daemon=True)
        self.data = data
        self.received = b""
        self.server = socket.create_server(("127.0.0.1", 0))
        self.port = self.server.getsockname()[1]

    def run(self):
        with self.server:
            conn, _ = self.server.accept()
            with conn:
                while len(self.received) < 68:
                    chunk = conn.recv(68 - len(self.received))
                    if not chunk:
                        break
                    self.received += chunk
                conn.sendall(self.data)


def test_record(tmp_path):
    device = FakeDevice(STREAM)
    device.start()
    output = tmp_path / "objects.yaml"
    store = tmp_path / "raw" / "lux.bin"

    assert record.main([
        "-o", str(output), "--host", "127.0.0.1", "--port", str(device.port), "--store-packets", str(store)
    ]) == 0
    device.join(timeout=5)

    assert len(device.received) == 68
    assert FrameHeader.decode(device.received).data_type is DataType.COMMAND
    assert FrameHeader.decode(device.received[34:]).data_type is DataType.COMMAND
    assert device.received[HEADER_SIZE] == 0x30

    documents = list(yaml.safe_load_all(output.read_text()))
    assert len(documents) == 1
    assert documents[0]["payload"]["objects"][0]["object_id"] == 3

    stored = list((tmp_path / "raw").glob("lux.*.bin"))
    assert len(stored) == 1
    assert stored[0].read_bytes() == STREAM
