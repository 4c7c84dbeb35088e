"""Module containing utilities for logging, along with a standard logger."""

import logging
from typing import Any, Mapping, Optional


def _get_logger(name: Optional[str] = "hdfsadapter") -> logging.Logger:
    stderrOutput = logging.StreamHandler()

    formatter = logging.Formatter("%(asctime)s - %(levelname)s - %(message)s")
    stderrOutput.setFormatter(formatter)

    logger = logging.getLogger(name)
    logger.addHandler(stderrOutput)

    return logger


def summarize(obj: Any, max_length: int = 255) -> str:
    """Return a stringified representation of the object up to the given length."""
    stringified_obj = str(obj)

    if len(stringified_obj) <= max_length:
        return stringified_obj
    else:
        return stringified_obj[: max_length - 3] + "..."


def describe(properties: Mapping[str, str]) -> str:
    """Render client configuration properties as a sorted, one-line summary."""
    return ", ".join(
        f"{key}={summarize(value, max_length=80)}"
        for key, value in sorted(properties.items())
    )


# Default logger
log = _get_logger()
