import yaml

from lux_tools import decode
from lux_frames import pack_frame, pack_header, pack_object, pack_object_payload, OBJECT_DATA, COMMAND

CAPTURE = (
    pack_frame(OBJECT_DATA, pack_object_payload([pack_object(1, [(5, 5)])]))
    + pack_header(0, 0x9999)
    + pack_frame(COMMAND, b"\x00" * 6)
    + pack_frame(OBJECT_DATA, pack_object_payload([]))
)


def test_decode_directory(tmp_path):
    source = tmp_path / "captures"
    (source / "run1").mkdir(parents=True)
    (source / "run1" / "lux.bin").write_bytes(CAPTURE)
    out_dir = tmp_path / "out"

    assert decode.main([str(source), str(out_dir), "-t", "object_data"]) == 0

    documents = list(yaml.safe_load_all((out_dir / "run1" / "lux.yaml").read_text()))
    assert [document["payload"]["number_of_objects"] for document in documents] == [1, 0]
    assert documents[0]["payload"]["objects"][0]["contour_points"] == [{"x": 5, "y": 5}]


def test_decode_truncated_file(tmp_path):
    source = tmp_path / "lux.bin"
    source.write_bytes(CAPTURE[:-4])

    assert decode.main([str(source), str(tmp_path / "out"), "-t", "object_data", "command"]) == 0

    documents = list(yaml.safe_load_all((tmp_path / "out" / "lux.yaml").read_text()))
    assert [document["header"]["data_type"] for document in documents] == ["OBJECT_DATA", "COMMAND"]


def test_decode_nothing(tmp_path):
    assert decode.main([str(tmp_path), str(tmp_path / "out")]) == 0
    assert not (tmp_path / "out").exists()
