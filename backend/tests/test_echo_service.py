import logging
import re
from datetime import datetime, timedelta, timezone

import pytest
from freezegun import freeze_time

from echome.core.config import Settings
from echome.core.errors import VALIDATION_ERROR_MESSAGE, EchoValidationError
from echome.schemas.echo import EchoRequest
from echome.services.echo_service import (
    EchoService,
    build_echoed_message,
    format_timestamp,
)

from .conftest import FIXED_TIMESTAMP

ISO_MILLIS = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z$")


def test_format_timestamp_uses_milliseconds_and_z():
    moment = datetime(2024, 1, 2, 3, 4, 5, 678999, tzinfo=timezone.utc)

    assert format_timestamp(moment) == "2024-01-02T03:04:05.678Z"


def test_format_timestamp_converts_other_offsets_to_utc():
    moment = datetime(2024, 1, 2, 5, 0, 0, tzinfo=timezone(timedelta(hours=2)))

    assert format_timestamp(moment) == "2024-01-02T03:00:00.000Z"


def test_build_echoed_message_template():
    assert build_echoed_message("Hi", "T") == 'Server says: "Hi" at T'


def test_process_when_valid_message_then_echoes(service):
    response = service.process({"message": "Hello"})

    assert response.original_message == "Hello"
    assert response.timestamp == FIXED_TIMESTAMP
    assert response.echoed_message == f'Server says: "Hello" at {FIXED_TIMESTAMP}'


def test_process_when_message_has_padding_then_keeps_it(service):
    response = service.process({"message": "  padded  "})

    assert response.original_message == "  padded  "
    assert response.echoed_message.startswith('Server says: "  padded  " at ')


def test_process_ignores_extra_fields(service):
    response = service.process({"message": "Hello", "other": 1})

    assert response.original_message == "Hello"


@pytest.mark.parametrize(
    "body",
    [
        {},
        {"message": None},
        {"message": 42},
        {"message": ["Hello"]},
        {"message": ""},
        {"message": "   "},
        {"message": "\n\t "},
        [],
        ["Hello"],
    ],
)
def test_validate_when_message_unusable_then_raises(service, body):
    with pytest.raises(EchoValidationError) as exc_info:
        service.validate(body)

    assert exc_info.value.status_code == 400
    assert exc_info.value.message == VALIDATION_ERROR_MESSAGE


def test_validate_returns_request(service):
    assert service.validate({"message": "x"}) == EchoRequest(message="x")


def test_process_uses_current_time_by_default():
    service = EchoService(Settings(_env_file=None))

    with freeze_time("2024-03-04 05:06:07.891"):
        response = service.process({"message": "Hello"})

    assert response.timestamp == "2024-03-04T05:06:07.891Z"
    assert ISO_MILLIS.match(response.timestamp)


def test_same_message_at_different_times_differs_only_by_time():
    service = EchoService(Settings(_env_file=None))

    with freeze_time("2024-03-04 05:06:07.000") as frozen:
        first = service.process({"message": "Hello"})
        frozen.tick(timedelta(milliseconds=5))
        second = service.process({"message": "Hello"})

    assert first.original_message == second.original_message == "Hello"
    assert first.timestamp != second.timestamp
    assert first.echoed_message != second.echoed_message


def test_success_is_logged_with_content(service, caplog):
    caplog.set_level(logging.INFO, logger="echome")

    service.process({"message": "Hello"})

    assert "Successfully processed message: 'Hello'" in caplog.text
    assert 'Server says: "Hello"' in caplog.text


def test_rejection_is_logged(service, caplog):
    caplog.set_level(logging.WARNING, logger="echome")

    with pytest.raises(EchoValidationError):
        service.validate({"message": "   "})

    assert "Validation error" in caplog.text
    assert any(record.levelno == logging.WARNING for record in caplog.records)


def test_message_content_can_be_kept_out_of_logs(fixed_clock, caplog):
    caplog.set_level(logging.INFO, logger="echome")
    service = EchoService(Settings(LOG_MESSAGE_CONTENT=False, _env_file=None), clock=fixed_clock)

    service.process({"message": "secret"})

    assert "secret" not in caplog.text
    assert "<6 chars>" in caplog.text
