"""Tests for the JSONL logging bootstrap."""

import json
import logging

from qjsx_loader.logging_setup import JsonlHandler
from qjsx_loader.logging_setup import init_json_logging


def read_lines(path):
    return [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines()]


def test_writes_structured_records(tmp_path, clean_root_logger):
    log_path = tmp_path / "logs" / "qjsx.log.jsonl"
    init_json_logging(log_path, "debug")

    logging.getLogger("qjsx_loader.resolvers").debug("[module:resolve] util -> local", extra={"specifier": "util"})

    (record,) = read_lines(log_path)
    assert record["lvl"] == "DEBUG"
    assert record["logger"] == "qjsx_loader.resolvers"
    assert record["message"] == "[module:resolve] util -> local"
    assert record["specifier"] == "util"
    assert record["schema"] == {"name": "qjsx.log", "ver": "1.0.0"}


def test_respects_level(tmp_path, clean_root_logger):
    log_path = tmp_path / "qjsx.log.jsonl"
    init_json_logging(log_path, "WARNING")

    logger = logging.getLogger("qjsx_loader.test")
    logger.info("hidden")
    logger.warning("shown")

    assert [r["message"] for r in read_lines(log_path)] == ["shown"]


def test_reinitializing_replaces_handler(tmp_path, clean_root_logger):
    init_json_logging(tmp_path / "first.jsonl", "INFO")
    init_json_logging(tmp_path / "second.jsonl", "INFO")

    handlers = [h for h in clean_root_logger.handlers if isinstance(h, JsonlHandler)]
    assert len(handlers) == 1
    assert handlers[0].path == tmp_path / "second.jsonl"


def test_event_field_and_dict_messages(tmp_path, clean_root_logger):
    log_path = tmp_path / "qjsx.log.jsonl"
    init_json_logging(log_path, "INFO")

    logger = logging.getLogger("qjsx_loader.test")
    logger.info("plain")
    logger.info("tagged", extra={"event": "module:resolve"})
    logger.info({"event": "module:load", "path": "./mods/utils.js"})

    plain, tagged, structured = read_lines(log_path)
    assert plain["event"] is None
    assert tagged["event"] == "module:resolve"
    assert structured["event"] == "module:load"
    assert structured["path"] == "./mods/utils.js"
