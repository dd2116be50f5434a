"""logstash-redis formatter: turn container log events into logstash documents."""

import json
import logging
import sys
from argparse import ArgumentParser

from logstash_redis.config import load_config, load_yaml_config
from logstash_redis.message import MessageBuilder, SerializationError
from logstash_redis.metrics import Metrics
from logstash_redis.models import EventError
from logstash_redis.reader import STDIN_PATH, parse_event_line, read_multiple

logger = logging.getLogger(__name__)


def build_parser() -> ArgumentParser:
    """Build the CLI argument parser."""
    parser = ArgumentParser(
        prog="logstash-redis",
        description="Format container log events (NDJSON) as logstash documents.",
    )
    parser.add_argument(
        "files",
        nargs="*",
        default=[STDIN_PATH],
        help="Event file path(s); '-' or none reads stdin",
    )
    parser.add_argument("--config", help="Optional YAML config file")
    parser.add_argument("--docker-host", dest="docker_host",
                        help="Identifier of the reporting docker host")
    parser.add_argument("--logstash-type", dest="logstash_type",
                        help="Value for the @type field")
    parser.add_argument("--suppress-type", dest="suppress_type",
                        action="store_const", const=True, default=None,
                        help="Omit the @type field")
    parser.add_argument("--v0-layout", dest="use_v0_layout",
                        action="store_const", const=True, default=None,
                        help="Emit the legacy @fields/@message layout")
    parser.add_argument("--logtypes",
                        help="Comma-separated recognized logtype values")
    parser.add_argument("--log-level", dest="log_level",
                        help="Logging level (default: INFO)")
    parser.add_argument("--output", help="Write documents to FILE instead of stdout")
    parser.add_argument("--stats", action="store_true",
                        help="Print run statistics as JSON to stderr")
    return parser


def run(args) -> Metrics:
    """Format every event from the input files and write one document per line."""
    config = load_config(args, load_yaml_config(args.config))
    logging.getLogger().setLevel(config.log_level)
    logger.info("Formatting events: docker_host=%s, type=%s, v0_layout=%s, logtypes=%s",
                config.docker_host,
                "<suppressed>" if config.suppress_type else config.logstash_type,
                config.use_v0_layout, ",".join(config.logtypes))

    builder = MessageBuilder.from_config(config)
    metrics = Metrics()

    out = open(args.output, "wb") if args.output else sys.stdout.buffer
    try:
        for line, source in read_multiple(args.files):
            try:
                event = parse_event_line(line)
            except EventError as e:
                metrics.record_invalid()
                logger.warning("Skipping invalid event from %s: %s", source, e)
                continue
            if event is None:
                continue

            try:
                document, merged = builder.encode_event(event)
            except SerializationError as e:
                metrics.record_failed()
                logger.warning("Skipping event from container %s: %s",
                               event.container_id, e)
                continue

            out.write(document + b"\n")
            metrics.record_formatted(json_payload=merged)
        out.flush()
    finally:
        if args.output:
            out.close()

    logger.info("Finished: %s", metrics.snapshot())
    return metrics


def main():
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
        stream=sys.stderr,
    )
    args = build_parser().parse_args()
    try:
        metrics = run(args)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if args.stats:
        print(json.dumps(metrics.snapshot(), indent=2), file=sys.stderr)


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        sys.exit(0)
    except BrokenPipeError:
        sys.exit(0)
