"""
logging_utils.py

Central logging utilities for the recipe_match engine.

Log format (one line):
<RunId>|<Date>|<Time>|<Level>|<File:Line>|<Module.Func>|<ModulePurpose>|
<InvokingFunc>|<InvokingFuncPurpose>|<Detail>|<NextStep>|<Resolution>|<END>

Two interfaces are offered:
  * get_logger(name) for modules, passing context through `extra=`
  * log_info / log_error for scripts that want the
    same line shape without holding a logger
"""

from __future__ import annotations

import datetime
import inspect
import logging
import uuid
from typing import Dict, Optional

LOG_RUN_ID: str = uuid.uuid4().hex[:8]
# Alias for scripts that use RUN_ID
RUN_ID: str = LOG_RUN_ID

_BASE_LOGGER_NAME = "recipe_match"


def _build_log_line(
    level: str,
    detailed_msg: str,
    *,
    module_purpose: str,
    invoking_function: str = "",
    invoking_purpose: str = "",
    next_step: str = "",
    resolution: str = "",
) -> str:
    # _build_log_line <- _log <- log_info/log_error <- caller
    frame = inspect.currentframe()
    caller = frame
    for _ in range(3):
        caller = caller.f_back if caller is not None else None

    if caller is not None:
        line_no = caller.f_lineno
        func_name = caller.f_code.co_name
    else:
        line_no = -1
        func_name = "<unknown>"

    now = datetime.datetime.now(datetime.timezone.utc)
    parts = [
        LOG_RUN_ID,
        now.strftime("%Y-%m-%d"),
        now.strftime("%H:%M:%S"),
        level.upper(),
        f"L{line_no}",
        func_name,
        module_purpose or "",
        invoking_function or "",
        invoking_purpose or "",
        detailed_msg or "",
        next_step or "",
        resolution or "",
        "END",
    ]
    return "|".join(parts)


def _log(
    level: str,
    message: str,
    *,
    module_purpose: str,
    invoking_function: str = "",
    invoking_purpose: str = "",
    next_step: str = "",
    resolution: str = "",
    exc: Optional[BaseException] = None,
) -> None:
    line = _build_log_line(
        level=level,
        detailed_msg=message,
        module_purpose=module_purpose,
        invoking_function=invoking_function,
        invoking_purpose=invoking_purpose,
        next_step=next_step,
        resolution=resolution,
    )

    if exc is not None:
        line = f"{line} | EXC={repr(exc)}"

    base = logging.getLogger(_BASE_LOGGER_NAME)
    if level.upper() == "ERROR":
        base.error(line)
    else:
        base.info(line)


def log_info(
    message: str,
    *,
    module_purpose: str,
    invoking_function: str = "",
    invoking_purpose: str = "",
    next_step: str = "",
    resolution: str = "",
) -> None:
    _log(
        "INFO",
        message,
        module_purpose=module_purpose,
        invoking_function=invoking_function,
        invoking_purpose=invoking_purpose,
        next_step=next_step,
        resolution=resolution,
    )


def log_error(
    message: str,
    *,
    module_purpose: str,
    invoking_function: str = "",
    invoking_purpose: str = "",
    next_step: str = "",
    resolution: str = "",
    exc: Optional[BaseException] = None,
) -> None:
    _log(
        "ERROR",
        message,
        module_purpose=module_purpose,
        invoking_function=invoking_function,
        invoking_purpose=invoking_purpose,
        next_step=next_step,
        resolution=resolution,
        exc=exc,
    )


# ============================================================================
# StructuredFormatter + get_logger() for Python logging
# ============================================================================

class StructuredFormatter(logging.Formatter):
    """
    Formatter that emits a single '|' separated line in the template
    described at the top of this module.

    Records produced by log_info/log_error are already
    formatted and pass through unchanged.
    """

    # High-level purposes by module name
    MODULE_PURPOSES: Dict[str, str] = {
        "text": "Normalize and tokenize free-text ingredient strings",
        "matcher": "Score one user ingredient against a recipe ingredient list",
        "ranker": "Rank a recipe corpus against the user's ingredients",
        "base": "Normalize duck-typed recipe documents",
        "corpus": "Load recipe corpus snapshots from JSON or Supabase",
        "parser": "Parse ingredient lines into quantity, unit and name",
        "reference": "Load and cache the nutrition reference table",
        "aggregator": "Aggregate nutrient totals over ingredient lines",
        "service": "Engine facade for search and nutrition requests",
        "config": "Create Supabase client and engine settings from env vars",
        "match_run": "Command-line runner for search and nutrition",
    }

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        detail = record.getMessage()
        if detail.endswith("|END") or "|END | EXC=" in detail:
            return detail

        dt = datetime.datetime.fromtimestamp(record.created)
        date_str = dt.strftime("%Y-%m-%d")
        time_str = dt.strftime("%H:%M:%S")

        run_id = getattr(record, "run_id", RUN_ID)

        level = record.levelname
        code_location = f"{record.filename}:{record.lineno}"
        func_name = record.funcName
        module_name = record.module
        module_purpose = self.MODULE_PURPOSES.get(module_name, "")

        # Optional extra context supplied via logger calls
        invoking_func = getattr(record, "invoking_func", "")
        invoking_purpose = getattr(record, "invoking_purpose", "")
        next_step = getattr(record, "next_step", "")
        resolution = getattr(record, "resolution", "")

        line = (
            f"{run_id}|{date_str}|{time_str}|{level}|{code_location}|"
            f"{module_name}.{func_name}|{module_purpose}|"
            f"{invoking_func}|{invoking_purpose}|"
            f"{detail}|{next_step}|{resolution}|<END>"
        )
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


def init_logging(level: int = logging.INFO) -> None:
    """
    Initialize the root logger once with StructuredFormatter.

    Modules call get_logger() instead of logging.basicConfig() so
    configuration stays central.
    """
    root = logging.getLogger()
    if root.handlers:
        # Already configured (pytest, REPL, host application)
        return

    handler = logging.StreamHandler()
    handler.setFormatter(StructuredFormatter())
    root.addHandler(handler)
    root.setLevel(level)


def get_logger(name: str) -> logging.Logger:
    """
    Return a logger configured with structured formatting.

    Usage:
        logger = get_logger(__name__)
        logger.info(
            "Ranked %d recipes",
            count,
            extra={
                "invoking_func": "rank",
                "invoking_purpose": "Rank corpus for a search request",
                "next_step": "Return RankedResult",
                "resolution": "",
            },
        )
    """
    init_logging()
    return logging.getLogger(name)
