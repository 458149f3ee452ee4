from __future__ import annotations

import logging.config

import yaml

LOGGING_CONFIG_PATH = "logging.yaml"


def configure_logging(path: str = LOGGING_CONFIG_PATH) -> None:
    with open(path) as f:
        config = yaml.safe_load(f.read())
        logging.config.dictConfig(config)
