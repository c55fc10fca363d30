"""
record the object (and optionally scan) stream of a LUX device to a YAML file
"""
import argparse
import logging
import socket
import sys
from contextlib import ExitStack
from pathlib import Path

from fancy import config as cfg

from ibeo import from_stream, send_time_sync, TransportError
from lux import logger as lux_logger
from lux.configs import RecordConfig, DEFAULT_HOST, DEFAULT_PORT, DATA_TYPE_NAMES
from lux.structures import get_parser, DECODERS
from lux.writers import YamlFrameWriter, RawFrameWriter

logger = logging.getLogger("root")
logger.setLevel(logging.INFO)
if not logger.handlers:
    logger.addHandler(logging.StreamHandler(sys.stdout))


def main(args_=None):
    config = RecordConfig(cfg.DictConfigLoader(vars(get_arg_parser().parse_args(args_))))
    if config.verbose:
        logger.setLevel(logging.DEBUG)
        lux_logger.setLevel(logging.DEBUG)

    logger.info(f"connecting to {config.host}:{config.port}")
    sock = socket.create_connection((config.host, config.port), timeout=config.connect_timeout)
    sock.settimeout(None)

    num_frames = 0
    num_dropped = 0

    def on_error(_error: Exception) -> None:
        nonlocal num_dropped
        num_dropped += 1

    with ExitStack() as stack:
        stack.enter_context(sock)
        data_stream = stack.enter_context(sock.makefile("rb"))
        if config.time_sync:
            send_time_sync(stack.enter_context(sock.makefile("wb")))

        writers = [stack.enter_context(YamlFrameWriter(
            stack.enter_context(config.output.open("w")), config.selected_types
        ))]
        if config.should_store_packets:
            writers.append(stack.enter_context(RawFrameWriter(
                stack.enter_context(config.packet_file_path.open("wb"))
            )))
            logger.info(f"storing raw frames to {config.packet_file_path}")

        parser = get_parser(t for t in config.selected_types if t in DECODERS)
        try:
            for frame in from_stream(data_stream, parser, on_error, config.read_bytes):
                num_frames += 1
                for writer in writers:
                    writer.accept(frame)
                logger.debug(f"frame {num_frames}: {frame.data_type.name}")
        except KeyboardInterrupt:
            logger.info("interrupted")
        except TransportError as e:
            logger.error(f"connection lost: {e}")
            return 1
        finally:
            logger.info(f"{num_frames} frames received, {num_dropped} dropped")

    logger.info("done.")
    return 0


def get_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser()
    parser.add_argument("-o", "--output", type=Path, required=True, help="YAML output file")
    parser.add_argument("--host", type=str, default=DEFAULT_HOST)
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    parser.add_argument("--connect-timeout", type=float, default=10., help="in seconds")
    parser.add_argument("--no-time-sync", dest="time_sync", action="store_false",
                        help="do not set the device clock on connect")
    parser.add_argument("--store-packets", type=Path, help="also store the raw frames to this path")
    parser.add_argument("-t", "--data-types", nargs="+", choices=sorted(DATA_TYPE_NAMES),
                        default=["object_data"], help="frame types written to the output")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


if __name__ == '__main__':
    exit(main())
