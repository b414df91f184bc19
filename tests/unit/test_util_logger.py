"""
Structured logging tests: JSON formatting, custom dimensions, phase timing,
run context and level control.
"""

import json
import logging

import pytest

from util_logger import (
    ComponentType,
    JSONFormatter,
    LogContext,
    LoggerFactory,
    LogLevel,
    log_context,
    log_exceptions,
    log_phase,
)


class TestJSONFormatter:

    def test_custom_dimensions_emitted(self):
        record = logging.LogRecord("x", logging.INFO, __file__, 1, "hello", None, None)
        record.custom_dimensions = {"pool_id": "p1"}
        payload = json.loads(JSONFormatter().format(record))
        assert payload["message"] == "hello"
        assert payload["customDimensions"]["pool_id"] == "p1"


class TestLoggerFactory:

    def test_component_dimensions_injected(self, caplog):
        logger = LoggerFactory.create_logger(ComponentType.SERVICE, "LoggerFactoryTest")
        with caplog.at_level(logging.INFO):
            logger.info("hello", extra={'custom_dimensions': {'job_id': 'j1'}})
        record = caplog.records[-1]
        assert record.custom_dimensions['component_type'] == 'service'
        assert record.custom_dimensions['component_name'] == 'LoggerFactoryTest'
        assert record.custom_dimensions['job_id'] == 'j1'

    def test_repeated_creation_adds_no_handlers(self):
        first = LoggerFactory.create_logger(ComponentType.REPOSITORY, "Repeated")
        count = len(first.handlers)
        second = LoggerFactory.create_logger(ComponentType.REPOSITORY, "Repeated")
        assert second is first
        assert len(second.handlers) == count


class TestLogPhase:

    def test_success_logs_start_and_finish(self, caplog):
        logger = LoggerFactory.create_logger(ComponentType.TRIGGER, "PhaseTest")
        with caplog.at_level(logging.INFO):
            with log_phase(logger, "quota_check"):
                pass
        messages = [r.getMessage() for r in caplog.records]
        assert any("quota_check started" in m for m in messages)
        assert any("quota_check finished" in m for m in messages)

    def test_failure_logged_and_reraised(self, caplog):
        logger = LoggerFactory.create_logger(ComponentType.TRIGGER, "PhaseTest")
        with caplog.at_level(logging.INFO):
            with pytest.raises(KeyError):
                with log_phase(logger, "monitoring"):
                    raise KeyError("x")
        assert any("monitoring failed" in r.getMessage() for r in caplog.records)


class TestLogExceptions:

    def test_reraises_after_logging(self, caplog):
        @log_exceptions(ComponentType.SERVICE, "DecoratedTest")
        def explode():
            raise ValueError("bad")

        with caplog.at_level(logging.ERROR):
            with pytest.raises(ValueError):
                explode()
        assert "Exception in explode" in caplog.text


class TestLogContext:

    def test_logger_context_attached(self, caplog):
        logger = LoggerFactory.create_logger(
            ComponentType.TRIGGER, "ContextTest", context=LogContext(pool_id="p1", job_id="j1")
        )
        with caplog.at_level(logging.INFO):
            logger.info("after context")
        dims = caplog.records[-1].custom_dimensions
        assert dims['pool_id'] == 'p1'
        assert dims['job_id'] == 'j1'
        assert 'resource_group' not in dims

    def test_run_context_reaches_every_logger_then_detaches(self, caplog):
        service = LoggerFactory.create_logger(ComponentType.SERVICE, "RunContextService")
        repository = LoggerFactory.create_logger(ComponentType.REPOSITORY, "RunContextRepository")

        with caplog.at_level(logging.INFO):
            with log_context(resource_group="rg", job_id="j1"):
                service.info("inside")
                repository.info("inside")
            service.info("outside")

        inside_service, inside_repository, outside = caplog.records[-3:]
        assert inside_service.custom_dimensions['job_id'] == 'j1'
        assert inside_repository.custom_dimensions['resource_group'] == 'rg'
        assert 'job_id' not in outside.custom_dimensions
        assert LoggerFactory._run_context is None

    def test_run_context_restored_after_exception(self):
        with pytest.raises(RuntimeError):
            with log_context(job_id="j1"):
                raise RuntimeError("boom")
        assert LoggerFactory._run_context is None


@pytest.fixture
def restore_level():
    previous = LoggerFactory._default_level
    yield
    LoggerFactory.set_level(previous)


class TestSetLevel:

    def test_applies_to_existing_and_new_loggers(self, restore_level):
        existing = LoggerFactory.create_logger(ComponentType.SERVICE, "LevelExisting")

        assert LoggerFactory.set_level("debug") is LogLevel.DEBUG

        created_after = LoggerFactory.create_logger(ComponentType.REPOSITORY, "LevelCreatedAfter")
        assert existing.level == logging.DEBUG
        assert created_after.level == logging.DEBUG
        assert all(h.level == logging.DEBUG for h in existing.handlers
                   if isinstance(h.formatter, JSONFormatter))

    def test_warning_suppresses_info(self, restore_level, caplog):
        logger = LoggerFactory.create_logger(ComponentType.SERVICE, "LevelQuiet")
        LoggerFactory.set_level(LogLevel.WARNING)
        with caplog.at_level(logging.DEBUG):
            logger.info("hidden")
            logger.warning("shown")
        messages = [r.getMessage() for r in caplog.records]
        assert "hidden" not in messages
        assert "shown" in messages

    def test_unknown_level_rejected(self, restore_level):
        with pytest.raises(KeyError):
            LoggerFactory.set_level("verbose")
