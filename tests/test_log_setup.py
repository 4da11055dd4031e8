import sys

from loguru import logger

from log_setup import setup_logging


def test_setup_logging_writes_log_file(tmp_path):
    log_file = setup_logging(tmp_path / "logs", "debug")
    try:
        logger.info("🛸 hello from the mothership")
    finally:
        logger.remove()
        logger.add(sys.stderr)

    assert log_file.name == "mothership.log"
    assert "hello from the mothership" in log_file.read_text(encoding="utf-8")


def test_log_lines_carry_mothership_id(tmp_path):
    log_file = setup_logging(tmp_path / "logs", "info")
    try:
        logger.info("before the id exists")
        with logger.contextualize(mothership="ms-1234"):
            logger.info("inside the mothership")
    finally:
        logger.remove()
        logger.add(sys.stderr)

    lines = log_file.read_text(encoding="utf-8").splitlines()
    assert any("| - | before the id exists" in line for line in lines)
    assert any("| ms-1234 | inside the mothership" in line for line in lines)
