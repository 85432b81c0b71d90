"""GitHub Actions runtime I/O: step outputs and workflow commands."""

from __future__ import annotations

import json
import logging
import os
import uuid
from typing import Any

import click

logger = logging.getLogger("trellosync.actions")


def _escape_data(value: str) -> str:
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def _format_value(value: Any) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value)


def set_output(name: str, value: Any) -> None:
    """Set a step output.

    Appends to the file named by ``GITHUB_OUTPUT`` using the heredoc form so
    multi-line values survive. Outside a runner the output is only logged.
    """
    text = _format_value(value)
    output_file = os.environ.get("GITHUB_OUTPUT")
    if not output_file:
        logger.info("output %s=%s", name, text)
        return

    delimiter = f"ghadelimiter_{uuid.uuid4()}"
    with open(output_file, "a", encoding="utf-8") as f:
        f.write(f"{name}<<{delimiter}\n{text}\n{delimiter}\n")


def notice(message: str) -> None:
    """Emit a ``::notice::`` workflow annotation."""
    click.echo(f"::notice::{_escape_data(message)}")


def set_failed(message: str) -> None:
    """Emit an ``::error::`` workflow annotation for a failed run.

    The caller is responsible for exiting non-zero.
    """
    click.echo(f"::error::{_escape_data(message)}")
