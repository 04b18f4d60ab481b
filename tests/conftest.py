import sys
from pathlib import Path

import pytest
from loguru import logger


def pytest_configure() -> None:
    # Keep `import chat_client...` working when running `pytest` from the repo root.
    repo_root_str = str(Path(__file__).resolve().parents[1])
    if repo_root_str not in sys.path:
        sys.path.insert(0, repo_root_str)


@pytest.fixture
def log_messages():
    messages: list[str] = []
    handler_id = logger.add(lambda m: messages.append(m.record["message"]), level="DEBUG")
    yield messages
    logger.remove(handler_id)
