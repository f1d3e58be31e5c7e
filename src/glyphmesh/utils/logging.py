"""Logging utilities for Glyphmesh."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import structlog

FILE_HANDLER_NAME = "glyphmesh.file"
CONSOLE_HANDLER_NAME = "glyphmesh.console"
HANDLER_NAMES = frozenset({FILE_HANDLER_NAME, CONSOLE_HANDLER_NAME})


@dataclass
class ProcessingStats:
    """Statistics from a processing run."""

    glyph_count: int = 0
    contour_count: int = 0
    vertex_count: int = 0
    triangle_count: int = 0
    face_count: int = 0
    side_walls: int = 0
    loops_removed: int = 0
    restored_vertices: int = 0
    mesh_vertices: int = 0
    transform: list[float] = field(default_factory=list)
    loops_by_glyph: dict[str, int] = field(default_factory=dict)
    sources: dict[str, str] = field(default_factory=dict)
    start_time: float | None = None
    end_time: float | None = None

    @property
    def duration_seconds(self) -> float:
        """Calculate processing duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "WARNING",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure dual-output structured logging.

    Args:
        log_file: Path to log file (no file output if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output

    Calling it again replaces the handlers a previous call installed.

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    for handler in list(root_logger.handlers):
        if handler.get_name() in HANDLER_NAMES:
            root_logger.removeHandler(handler)
            handler.close()

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.set_name(FILE_HANDLER_NAME)
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        root_logger.addHandler(file_handler)

    if not quiet:
        console_handler = logging.StreamHandler()
        console_handler.set_name(CONSOLE_HANDLER_NAME)
        console_handler.setLevel(getattr(logging, console_level.upper()))
        console_handler.setFormatter(logging.Formatter("%(message)s"))
        root_logger.addHandler(console_handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("glyphmesh")
    logger.info(
        "Logging initialized",
        log_file=str(log_file) if log_file else None,
        level=file_level,
    )

    return logger


class ProcessingLogger:
    """Logger for tracking processing progress and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = ProcessingStats()

    def log_glyph_sanitized(self, glyph_name: str, loops_removed: int, source: str) -> None:
        """Log loop removal for one glyph."""
        self._stats.glyph_count += 1
        self._stats.loops_by_glyph[glyph_name] = loops_removed
        self._stats.sources[glyph_name] = source
        self._stats.loops_removed += loops_removed
        if loops_removed:
            self._logger.info(
                "Removed loops",
                glyph=glyph_name,
                loops=loops_removed,
                source=source,
            )

    def log_glyph_start(self, glyph_name: str, contours: int, vertices: int) -> None:
        """Log start of glyph extrusion."""
        self._logger.debug(
            "Extruding glyph",
            glyph=glyph_name,
            contours=contours,
            vertices=vertices,
        )
        self._stats.contour_count += contours
        self._stats.vertex_count += vertices

    def log_restored_vertices(self, glyph_name: str, restored: int) -> None:
        """Log collinear vertices put back after tessellation."""
        self._logger.debug(
            "Restored collinear vertices",
            glyph=glyph_name,
            restored=restored,
        )
        self._stats.restored_vertices += restored

    def log_glyph_complete(
        self,
        glyph_name: str,
        triangles: int,
        cap_faces: int,
        side_faces: int,
        duration_ms: float,
    ) -> None:
        """Log successful glyph extrusion."""
        self._logger.info(
            "Glyph extruded",
            glyph=glyph_name,
            triangles=triangles,
            cap_faces=cap_faces,
            side_faces=side_faces,
            duration_ms=round(duration_ms, 2),
        )
        self._stats.triangle_count += triangles
        self._stats.face_count += cap_faces + side_faces
        self._stats.side_walls += side_faces // 2

    def log_glyph_error(self, glyph_name: str, error: Exception) -> None:
        """Log a fatal glyph processing error."""
        self._logger.error(
            "Glyph processing failed",
            glyph=glyph_name,
            error=str(error),
            error_type=type(error).__name__,
        )

    @property
    def stats(self) -> ProcessingStats:
        """Get current processing statistics."""
        return self._stats
