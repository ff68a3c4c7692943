"""Entry point — python -m mikrotik_exporter."""

from __future__ import annotations

import argparse
import asyncio
import sys


def main() -> None:
    from mikrotik_exporter.config.settings import ServerConfig

    defaults = ServerConfig.from_env()

    parser = argparse.ArgumentParser(
        prog="mikrotik-exporter",
        description="Multi-target Prometheus exporter for MikroTik RouterOS",
    )
    parser.add_argument(
        "-c", "--config",
        help="Path to configuration YAML file (env: CONFIG_FILE)",
        default=defaults.config_file,
    )
    parser.add_argument(
        "--listen-addr",
        help="Address to listen on (env: LISTEN_ADDR)",
        default=defaults.listen_addr,
    )
    parser.add_argument(
        "--listen-port",
        type=int,
        help="Port to listen on (env: LISTEN_PORT)",
        default=defaults.listen_port,
    )
    parser.add_argument(
        "--namespace",
        help="Metric name prefix (env: METRICS_NAMESPACE)",
        default=defaults.namespace,
    )
    parser.add_argument(
        "--log-level",
        help="Logging level (env: LOG_LEVEL)",
        default=defaults.log_level,
    )
    args = parser.parse_args()

    from mikrotik_exporter.app import Application, setup_logging

    setup_logging(args.log_level)
    server_config = defaults.model_copy(update={
        "config_file": args.config,
        "listen_addr": args.listen_addr,
        "listen_port": args.listen_port,
        "namespace": args.namespace,
        "log_level": args.log_level,
    })

    try:
        app = Application(server_config)
    except ValueError as exc:
        print(f"Failed to load configuration: {exc}", file=sys.stderr)
        sys.exit(1)
    try:
        asyncio.run(app.serve())
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
