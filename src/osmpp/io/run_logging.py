# io/run_logging.py
import json
import logging
import sys

from osmpp.pipeline.hooks import NoopHooks


class _JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "level": record.levelname,
            "msg": record.getMessage(),
            "logger": record.name,
        }
        extra = getattr(record, "extra", None)
        if isinstance(extra, dict):
            payload.update(extra)
        return json.dumps(payload, default=str)


def _default_json_logger(name="osmpp", level="WARNING"):
    # stderr: stdout carries the run report
    logger = logging.getLogger(name)
    if not logger.handlers:
        h = logging.StreamHandler(sys.stderr)
        h.setFormatter(_JsonFormatter())
        logger.addHandler(h)
        logger.propagate = False
    logger.setLevel(level)
    return logger


class RunLogging(NoopHooks):
    """
    Structured logs for a pipeline run.
    Per-record events are DEBUG and only emitted with debug=True, sampled.
    """

    def __init__(
        self,
        run_id: str = "local",
        level: str = "WARNING",
        debug: bool = False,
        sample_every: int = 1000,
        logger: logging.Logger | None = None,
    ):
        self.run_id, self.debug, self.sample_every = run_id, debug, max(1, sample_every)
        self.log = logger or _default_json_logger(level=level)
        self._records = 0

    # --------------- Helpers -----------------------------

    def _emit(self, level: str, msg: str, **extra):
        payload = {"run_id": self.run_id, **extra}
        self.log.log(getattr(logging, level), msg, extra={"extra": payload})

    def _sampled(self) -> bool:
        self._records += 1
        return self.debug and (self._records % self.sample_every) == 0

    # --------------- Lifecycle -----------------------------

    def run_start(self, *, start_node: int):
        self._emit("INFO", "run_start", start_node=start_node)

    def run_end(self, *, stats, wall_ms: float):
        self._emit(
            "INFO",
            "run_end",
            nodes=stats.nodes,
            ways=stats.ways,
            relations=stats.relations,
            network_nodes=stats.network_nodes_written,
            turning_nodes=stats.turning_written,
            wall_ms=round(wall_ms, 3),
        )

    def drain(self, *, tracked: int):
        self._emit("INFO", "drain", tracked=tracked)

    def error(self, *, exc: BaseException, **extra):
        self._emit("ERROR", "run_error", error=str(exc), error_type=type(exc).__name__, **extra)

    # --------------- Records -----------------------------

    def network_node(self, node, *, source_id: int, category: str):
        if self._sampled():
            self._emit("DEBUG", "network_node", id=node.id, source_id=source_id, category=category)

    def turning_registered(self, node, *, kind: str, tracked: int):
        if self._sampled():
            self._emit("DEBUG", "turning_registered", id=node.id, kind=kind, tracked=tracked)

    def way_annotated(self, way, *, category: str, added: int):
        if self._sampled():
            self._emit("DEBUG", "way_annotated", way_id=way.id, category=category, added=added)
