"""
decode raw frame captures (see record --store-packets) into YAML files
"""
import argparse
import logging
import sys
from pathlib import Path

from fancy import config as cfg

from ibeo import from_stream, TransportClosedError
from lux import logger as lux_logger
from lux.configs import DecodeConfig, DATA_TYPE_NAMES
from lux.structures import get_parser, DECODERS
from lux.writers import YamlFrameWriter

logger = logging.getLogger("root")
logger.setLevel(logging.INFO)
if not logger.handlers:
    logger.addHandler(logging.StreamHandler(sys.stdout))


def main(args_=None):
    config = DecodeConfig(cfg.DictConfigLoader(vars(get_arg_parser().parse_args(args_))))
    if config.verbose:
        logger.setLevel(logging.DEBUG)
        lux_logger.setLevel(logging.DEBUG)

    if len(config.sources) == 0:
        logger.info("no source processed")
        return 0

    parser = get_parser(t for t in config.selected_types if t in DECODERS)
    for source in config.sources:
        output_path = config.get_output_path(source)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        num_frames = decode_file(source, output_path, parser, config.selected_types)
        logger.info(f"{source}: {num_frames} frames => {output_path}")

    logger.info("done.")
    return 0


def decode_file(source: Path, output_path: Path, parser, data_types) -> int:
    num_frames = 0
    errors = []
    with source.open("rb") as stream, \
            output_path.open("w") as fp, \
            YamlFrameWriter(fp, data_types) as writer:
        try:
            for frame in from_stream(stream, parser, errors.append):
                writer.accept(frame)
                num_frames += 1
        except TransportClosedError as e:
            logger.warning(f"{source} ends inside a frame: {e}")
    if errors:
        logger.warning(f"{source}: dropped {len(errors)} headers or frames")
    return num_frames


def get_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser()
    parser.add_argument("source", type=Path, help="capture file or directory")
    parser.add_argument("out_dir", type=Path, help="output directory")
    parser.add_argument("-p", "--pattern", type=str, default="**/*.bin")
    parser.add_argument("-t", "--data-types", nargs="+", choices=sorted(DATA_TYPE_NAMES),
                        default=["scan_data", "object_data"], help="frame types written to the output")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


if __name__ == '__main__':
    exit(main())
