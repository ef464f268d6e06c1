"""
Logging setup. Every record carries the id of the request being served
(`-` outside a request), so service logs can be joined to the access log.
"""
import logging
from contextvars import ContextVar

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s [%(request_id)s] %(message)s"

request_id_var: ContextVar[str] = ContextVar("request_id", default="-")


class RequestIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get()
        return True


def setup_logging(level: str = "INFO") -> None:
    lvl = getattr(logging, level.upper(), logging.INFO)
    handler = logging.StreamHandler()
    handler.addFilter(RequestIdFilter())
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    # no-op when the root logger is already configured (uvicorn --log-config, pytest)
    logging.basicConfig(level=lvl, handlers=[handler])
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access", "noteart"):
        logging.getLogger(name).setLevel(lvl)
    # botocore logs every signed request at INFO
    logging.getLogger("botocore").setLevel(max(lvl, logging.WARNING))
