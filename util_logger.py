"""
Unified Logger System.

JSON-only structured logging for the Batch account workflow. Every log line
is a single JSON object on stdout so runs can be piped into any log collector.

Design Principles:
    - Strong typing with dataclasses (stdlib only)
    - Enum safety for categories
    - Component-specific loggers
    - Clean factory pattern

Exports:
    ComponentType: Enum for component types
    LogLevel: Enum for log levels
    LogContext: Logging context dataclass
    LoggerFactory: Factory for creating loggers
    JSONFormatter: Formatter emitting one JSON object per record
    log_exceptions: Exception logging decorator
    log_phase: Context manager that logs start/finish/duration of a workflow phase
    log_context: Context manager that attaches a LogContext to every logger for a run

Dependencies:
    Standard library only (logging, enum, dataclasses, json)
"""

from enum import Enum
from typing import Optional, Dict, Any
from datetime import datetime, timezone
from dataclasses import dataclass
from functools import wraps
from contextlib import contextmanager
import logging
import sys
import os
import json
import time
import traceback


# ============================================================================
# COMPONENT TYPES - Layers of the workflow
# ============================================================================

class ComponentType(Enum):
    """
    Component types aligned with the workflow layers.

    Each layer has specific logging needs and levels.
    """
    SERVICE = "service"        # Workflow steps (account, pool, job)
    REPOSITORY = "repository"  # Azure SDK access layer
    FACTORY = "factory"        # Client/repository creation
    TRIGGER = "trigger"        # Entry point (main / run_sample)
    VALIDATOR = "validator"    # Configuration and credential validation


# ============================================================================
# LOG LEVELS - Standard Python levels with enum safety
# ============================================================================

class LogLevel(Enum):
    """
    Standard Python log levels as enum for type safety.
    """
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

    def to_python_level(self) -> int:
        """Convert to Python logging level constant."""
        return getattr(logging, self.value)

    @classmethod
    def from_string(cls, level: str) -> 'LogLevel':
        """Create from string, case-insensitive."""
        return cls[level.upper()]


# ============================================================================
# LOG CONTEXT - Correlation and tracking
# ============================================================================

@dataclass
class LogContext:
    """
    Context for log correlation across a workflow run.

    Every field is optional; only populated fields are emitted.
    """
    resource_group: Optional[str] = None
    account_name: Optional[str] = None
    pool_id: Optional[str] = None
    job_id: Optional[str] = None
    region: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            k: v for k, v in {
                'resource_group': self.resource_group,
                'account_name': self.account_name,
                'pool_id': self.pool_id,
                'job_id': self.job_id,
                'region': self.region,
            }.items() if v is not None
        }


# ============================================================================
# COMPONENT CONFIGURATION - Per-component settings
# ============================================================================

@dataclass
class ComponentConfig:
    """
    Configuration for component-specific logging.
    """
    component_type: ComponentType
    log_level: LogLevel = LogLevel.INFO
    enable_performance_logging: bool = False


# ============================================================================
# JSON FORMATTER - Structured logging
# ============================================================================

class JSONFormatter(logging.Formatter):
    """
    JSON formatter for structured logging.
    """

    def format(self, record: logging.LogRecord) -> str:
        """
        Format log record as a single-line JSON object.

        Args:
            record: Python LogRecord to format

        Returns:
            JSON string with structured log data
        """
        log_obj = {
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'level': record.levelname,
            'message': record.getMessage(),
            'logger': record.name,
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno
        }

        if hasattr(record, 'custom_dimensions'):
            log_obj['customDimensions'] = record.custom_dimensions

        if record.exc_info:
            log_obj['exception'] = {
                'type': record.exc_info[0].__name__ if record.exc_info[0] else None,
                'message': str(record.exc_info[1]) if record.exc_info[1] else None,
                'traceback': self.formatException(record.exc_info)
            }

        return json.dumps(log_obj, default=str)


# ============================================================================
# LOGGER FACTORY - Creates component-specific loggers
# ============================================================================

class LoggerFactory:
    """
    Factory for creating component-specific loggers.

    Example:
        logger = LoggerFactory.create_logger(
            ComponentType.SERVICE,
            "BatchPoolService"
        )
        logger.info("Creating pool")
    """

    _default_level = LogLevel.DEBUG if os.getenv('DEBUG_LOGGING', '').lower() == 'true' else LogLevel.INFO

    # Attached to every factory logger while a run is active
    _run_context: Optional[LogContext] = None

    _loggers: Dict[str, logging.Logger] = {}

    DEFAULT_CONFIGS = {
        ComponentType.SERVICE: ComponentConfig(
            component_type=ComponentType.SERVICE,
            log_level=_default_level,
            enable_performance_logging=True
        ),
        ComponentType.REPOSITORY: ComponentConfig(
            component_type=ComponentType.REPOSITORY,
            log_level=_default_level
        ),
        ComponentType.FACTORY: ComponentConfig(
            component_type=ComponentType.FACTORY,
            log_level=_default_level
        ),
        ComponentType.TRIGGER: ComponentConfig(
            component_type=ComponentType.TRIGGER,
            log_level=_default_level,
            enable_performance_logging=True
        ),
        ComponentType.VALIDATOR: ComponentConfig(
            component_type=ComponentType.VALIDATOR,
            log_level=_default_level
        ),
    }

    @classmethod
    def create_logger(
        cls,
        component_type: ComponentType,
        name: str,
        context: Optional[LogContext] = None,
        config: Optional[ComponentConfig] = None
    ) -> logging.Logger:
        """
        Create a logger for a specific component.

        Args:
            component_type: Type of component
            name: Component name (e.g., "BatchAccountService")
            context: Optional log context for correlation
            config: Optional custom configuration

        Returns:
            Configured Python logger
        """
        if config is None:
            config = cls.DEFAULT_CONFIGS.get(
                component_type,
                ComponentConfig(component_type=component_type)
            )

        logger_name = f"{component_type.value}.{name}"
        logger = logging.getLogger(logger_name)

        if isinstance(config.log_level, str):
            log_level = LogLevel.from_string(config.log_level).to_python_level()
        else:
            log_level = config.log_level.to_python_level()
        logger.setLevel(log_level)

        # Guard against duplicate handlers when create_logger is called repeatedly
        has_json_handler = any(
            isinstance(h.formatter, JSONFormatter) for h in logger.handlers
        )
        if not has_json_handler:
            handler = logging.StreamHandler(sys.stdout)
            handler.setLevel(log_level)
            handler.setFormatter(JSONFormatter())
            logger.addHandler(handler)

        if context is not None:
            logger._log_context = context

        # Keep propagation so pytest's caplog and any root handlers see records
        logger.propagate = True

        if not hasattr(logger, '_context_wrapped'):
            original_log = logger._log

            def log_with_context(level, msg, args, exc_info=None, extra=None, stack_info=False, stacklevel=1):
                """Wrapper to inject context as custom dimensions."""
                if extra is None:
                    extra = {}

                custom_dims = {}
                if cls._run_context:
                    custom_dims.update(cls._run_context.to_dict())
                active_context = getattr(logger, '_log_context', None)
                if active_context:
                    custom_dims.update(active_context.to_dict())
                custom_dims['component_type'] = component_type.value
                custom_dims['component_name'] = name

                if 'custom_dimensions' in extra:
                    custom_dims.update(extra['custom_dimensions'])

                extra['custom_dimensions'] = custom_dims

                original_log(level, msg, args, exc_info=exc_info, extra=extra,
                             stack_info=stack_info, stacklevel=stacklevel + 1)

            logger._log = log_with_context
            logger._context_wrapped = True

        cls._loggers[logger_name] = logger
        return logger

    @classmethod
    def set_level(cls, level) -> LogLevel:
        """
        Apply a log level to every factory logger, existing and future.

        Args:
            level: LogLevel or level name (case-insensitive)

        Returns:
            The LogLevel applied

        Raises:
            KeyError: If the name is not a known level
        """
        log_level = LogLevel.from_string(level) if isinstance(level, str) else level
        cls._default_level = log_level
        for component_config in cls.DEFAULT_CONFIGS.values():
            component_config.log_level = log_level

        python_level = log_level.to_python_level()
        for logger in cls._loggers.values():
            logger.setLevel(python_level)
            for handler in logger.handlers:
                if isinstance(handler.formatter, JSONFormatter):
                    handler.setLevel(python_level)
        return log_level

    @classmethod
    def set_run_context(cls, context: Optional[LogContext]) -> None:
        """Attach context to every factory logger; None detaches it."""
        cls._run_context = context


# ============================================================================
# EXCEPTION DECORATOR - Automatic exception logging with context
# ============================================================================

def log_exceptions(component_type: Optional[ComponentType] = None,
                   component_name: Optional[str] = None,
                   logger: Optional[logging.Logger] = None):
    """
    Decorator to automatically log exceptions with full context.

    Can be used in three ways:
    1. With existing logger: @log_exceptions(logger=my_logger)
    2. With component info: @log_exceptions(ComponentType.SERVICE, "PoolService")
    3. Simple: @log_exceptions() - uses function module and name

    The exception is always re-raised.
    """
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            if logger:
                log = logger
            elif component_type and component_name:
                log = LoggerFactory.create_logger(component_type, component_name)
            else:
                log = LoggerFactory.create_logger(
                    ComponentType.SERVICE,
                    func.__module__ or "unknown"
                )

            try:
                return func(*args, **kwargs)
            except Exception as e:
                log.error(
                    f"Exception in {func.__name__}",
                    exc_info=True,
                    extra={
                        'custom_dimensions': {
                            'function_name': func.__name__,
                            'function_module': func.__module__,
                            'exception_type': type(e).__name__,
                            'exception_message': str(e),
                            'traceback': traceback.format_exc()
                        }
                    }
                )
                raise
        return wrapper
    return decorator


# ============================================================================
# RUN CONTEXT
# ============================================================================

@contextmanager
def log_context(**fields):
    """
    Attach LogContext fields to every factory logger for the duration of a block.

    The previous run context is restored on exit, including after an exception.

    Example:
        with log_context(resource_group=rg, pool_id=pool_id):
            pool_service.provision()
    """
    previous = LoggerFactory._run_context
    LoggerFactory.set_run_context(LogContext(**fields))
    try:
        yield
    finally:
        LoggerFactory.set_run_context(previous)


# ============================================================================
# PHASE TIMING
# ============================================================================

@contextmanager
def log_phase(logger: logging.Logger, phase: str, **extra_fields):
    """
    Log the start, end and duration of a workflow phase.

    Exceptions propagate unchanged after a failure line is logged.

    Example:
        with log_phase(logger, "pool_provisioning", pool_id=pool_id):
            pool_service.acquire_pool()
    """
    start = time.time()
    logger.info(f"▶️ {phase} started", extra={'custom_dimensions': {'phase': phase, **extra_fields}})
    try:
        yield
    except Exception as e:
        duration_ms = round((time.time() - start) * 1000, 1)
        logger.error(
            f"❌ {phase} failed after {duration_ms}ms: {e}",
            extra={'custom_dimensions': {
                'phase': phase,
                'duration_ms': duration_ms,
                'error_type': type(e).__name__,
                **extra_fields
            }}
        )
        raise
    duration_ms = round((time.time() - start) * 1000, 1)
    logger.info(
        f"✅ {phase} finished in {duration_ms}ms",
        extra={'custom_dimensions': {'phase': phase, 'duration_ms': duration_ms, **extra_fields}}
    )
