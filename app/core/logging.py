import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s [task_id=%(task_id)s stage=%(stage)s] - %(message)s"
CONTEXT_FIELDS = ("task_id", "stage")
# Libraries that log every HTTP request at INFO
NOISY_LOGGERS = ("httpx", "httpcore", "anthropic")


class ContextFormatter(logging.Formatter):
    """Renders records logged outside a stage run with '-' for the context fields."""

    def format(self, record):
        for field in CONTEXT_FIELDS:
            if getattr(record, field, None) is None:
                setattr(record, field, "-")
        return super().format(record)


class StageLogAdapter(logging.LoggerAdapter):
    """
    Stamps records with the running task id and the stage state it is in
    at the moment of the call, so state transitions show up without
    threading ``extra`` through every log line.
    """

    def __init__(self, logger: logging.Logger, ctx):
        super().__init__(logger, {})
        self.ctx = ctx

    def process(self, msg, kwargs):
        extra = {"task_id": self.ctx.request.task_id, "stage": self.ctx.state.value}
        extra.update(kwargs.get("extra") or {})
        kwargs["extra"] = extra
        return msg, kwargs


def configure_logging(level: str = "INFO") -> None:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(ContextFormatter(LOG_FORMAT))
    logging.basicConfig(level=level.upper(), handlers=[handler])
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
