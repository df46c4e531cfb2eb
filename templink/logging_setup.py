import logging
import sys
from typing import Any, Dict

import structlog

TEMPLATE_ROOT_KEY = "template_root"

def prefix_template_root(_logger: Any, _method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    # console only: "[parent.html] template_unit_parsed" instead of a trailing template_root=... pair.
    root = event_dict.pop(TEMPLATE_ROOT_KEY, None)
    if root is not None:
        event_dict["event"] = f"[{root}] {event_dict.get('event', '')}"
    return event_dict

def configure_logging(log_level_str: str = "warning", force_json_logs: bool = False):
    # structlog -> stdlib "templink" logger. Events logged while a root is being
    # composed carry template_root (bound by the engine through contextvars).
    log_level = getattr(logging, log_level_str.upper(), logging.WARNING)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    if force_json_logs:
        render_chain = [structlog.processors.JSONRenderer()]
    else:
        render_chain = [prefix_template_root, structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())]

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, *render_chain],
        foreign_pre_chain=[structlog.stdlib.add_log_level],
    )

    handler = logging.StreamHandler()
    handler.setFormatter(formatter)

    templink_logger = logging.getLogger("templink")
    templink_logger.handlers.clear()
    templink_logger.addHandler(handler)
    templink_logger.setLevel(log_level)

    structlog.get_logger(__name__).info("logging_configured", level=log_level_str, json=force_json_logs)
