import logging
from datetime import datetime, timezone

logger = logging.getLogger("mrprime.audit")

HANDLER_NAME = "mrprime-audit"


class _AuditFormatter(logging.Formatter):
    def format(self, record):
        ts = datetime.fromtimestamp(record.created, timezone.utc).isoformat(timespec="seconds")
        return f"[audit] {ts.replace('+00:00', 'Z')} | {record.getMessage()}"


def configure_logging(level="INFO"):
    root = logging.getLogger("mrprime")
    root.setLevel(level)
    if not any(h.get_name() == HANDLER_NAME for h in root.handlers):
        handler = logging.StreamHandler()
        handler.set_name(HANDLER_NAME)
        handler.setFormatter(_AuditFormatter())
        root.addHandler(handler)
    return root


def log_event(kind, subject, detail):
    logger.info("%s | %s | %s", kind, subject, detail)
