from datetime import datetime
from pathlib import Path
from typing import Optional, Iterable

from fancy import config as cfg

from ibeo import DataType, READ_BYTES

DEFAULT_HOST = "192.168.0.1"
DEFAULT_PORT = 12002
DATA_TYPE_NAMES = {data_type.name.lower(): data_type for data_type in DataType}


def parse_data_types(names: Iterable[str]) -> list[DataType]:
    try:
        return [DATA_TYPE_NAMES[name.lower()] for name in names]
    except KeyError as e:
        raise ValueError(f"unknown data type {e.args[0]!r}, choose from {sorted(DATA_TYPE_NAMES)}") from None


def timestamped(path: Path) -> Path:
    """
    capture.bin => capture.20220706T222723.bin
    """
    return path.with_suffix(f'.{datetime.now().strftime("%Y%m%dT%H%M%S")}{path.suffix}')


class RecordConfig(cfg.BaseConfig):
    host: str = cfg.Option(required=True, type=str)
    port: int = cfg.Option(required=True, type=int)
    connect_timeout: float = cfg.Option(required=True, type=float, description="in seconds")
    read_bytes: int = cfg.Lazy(lambda c: READ_BYTES)
    time_sync: bool = cfg.Option(type=bool)
    output: Path = cfg.Option(required=True, type=Path)
    _store_packets: Optional[Path] = cfg.Option(name="store_packets", nullable=True, type=Path)
    _data_types: list[str] = cfg.Option(name="data_types", type=[str])
    verbose: bool = cfg.Option(type=bool)

    selected_types: list[DataType] = cfg.PlaceHolder()
    should_store_packets: bool = cfg.PlaceHolder()
    packet_file_path: Optional[Path] = cfg.PlaceHolder()

    def post_load(self):
        self.load_lazies()
        self.selected_types = parse_data_types(self._data_types)
        self.output.parent.mkdir(parents=True, exist_ok=True)
        self.should_store_packets = self._store_packets is not None
        self.packet_file_path = None
        if self.should_store_packets:
            self._store_packets.parent.mkdir(parents=True, exist_ok=True)
            self.packet_file_path = timestamped(self._store_packets)


class DecodeConfig(cfg.BaseConfig):
    source: Path = cfg.Option(required=True, type=Path, description="capture file or directory")
    pattern: str = cfg.Option(required=True, type=str)
    out_dir: Path = cfg.Option(required=True, type=Path)
    _data_types: list[str] = cfg.Option(name="data_types", type=[str])
    verbose: bool = cfg.Option(type=bool)

    selected_types: list[DataType] = cfg.PlaceHolder()
    sources: list[Path] = cfg.PlaceHolder()
    source_base_path: Path = cfg.PlaceHolder()

    def post_load(self):
        self.selected_types = parse_data_types(self._data_types)
        if self.source.is_file():
            self.sources = [self.source]
            self.source_base_path = self.source.parent
        elif self.source.is_dir():
            self.sources = sorted(self.source.glob(self.pattern))
            self.source_base_path = self.source
        else:
            raise FileNotFoundError(self.source)

    def get_output_path(self, source: Path) -> Path:
        return (self.out_dir / source.relative_to(self.source_base_path)).with_suffix(".yaml")
