"""clabot entry point: run the webhook server.

Usage: clabot [--config config.yaml] [--check] [--help-json]
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from clabot.config import AppConfig, load_config
from clabot.logging import ClabotLogging
from clabot.plugin import plugin_help
from clabot.webhook.server import run_webhook_server


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments."""
    parser = argparse.ArgumentParser(
        prog="clabot",
        description="clabot - sync cncf-cla labels with the EasyCLA status context",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=Path("config.yaml"),
        help="Path to YAML config file",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Only load and validate config, then exit",
    )
    parser.add_argument(
        "--help-json",
        action="store_true",
        help="Print plugin help as JSON and exit",
    )
    return parser.parse_args(argv)


def run(config: AppConfig) -> None:
    """Configure logging and serve webhooks."""
    ClabotLogging(config.logging).setup()
    log = logging.getLogger("clabot.main")
    if not config.webhook.enabled:
        log.warning("Webhook disabled in config; nothing to do.")
        return
    log.info("clabot started | api=%s | webhook=%s", config.github.api_url, config.github.webhook_path)
    run_webhook_server(config)


def main(argv: list[str] | None = None) -> int:
    """Entry point for clabot."""
    args = parse_args(argv)

    if args.help_json:
        print(json.dumps(plugin_help().model_dump(), indent=2))
        return 0

    config_path = args.config
    if not config_path.is_file() and config_path == Path("config.yaml"):
        if Path("config.example.yaml").is_file():
            config_path = Path("config.example.yaml")
            logging.basicConfig(level=logging.INFO)
            logging.getLogger("clabot.main").warning("config.yaml not found, using config.example.yaml")

    config = load_config(config_path)

    if args.check:
        print("Config OK:", config.github.api_url, config.github.webhook_path)
        return 0

    try:
        run(config)
    except KeyboardInterrupt:
        return 0
    except Exception as e:
        logging.getLogger("clabot.main").exception("Fatal error: %s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
