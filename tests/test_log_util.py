import logging
import time

import pytest

from g3device import log_util
from g3device.loc_target import (
    TARGET_DEFAULT,
    TARGET_MDM,
    TARGET_QCA1530,
    TARGET_UNKNOWN,
)
from g3device.log_util import (
    LOG_D,
    LOG_E,
    LOG_I,
    LOG_V,
    LOG_W,
    UNKNOWN_STR,
    LocLogger,
    get_time,
    get_timestamp,
    msg_q_status_name,
    name_from_mask,
    name_from_val,
    succ_fail_string,
    target_name,
)
from g3device.msg_q import MsgQStatus

TABLE = [("ALPHA", 1), ("BETA", 2), ("GAMMA", 4)]


def _clock_fields(stamp):
    hours, minutes, rest = stamp.split(":")
    seconds, fraction = rest.split(".")
    return int(hours), int(minutes), int(seconds), fraction


def test_name_from_val_finds_entry():
    assert name_from_val(TABLE, 2) == "BETA"


def test_name_from_val_unknown():
    assert name_from_val(TABLE, 3) == UNKNOWN_STR


def test_name_from_mask_returns_first_overlap():
    assert name_from_mask(TABLE, 6) == "BETA"
    assert name_from_mask(TABLE, 8) == UNKNOWN_STR


def test_msg_q_status_names():
    assert msg_q_status_name(MsgQStatus.SUCCESS) == "eMSG_Q_SUCCESS"
    assert msg_q_status_name(-4) == "eMSG_Q_UNAVAILABLE_RESOURCE"
    assert msg_q_status_name(-5) == "eMSG_Q_INSUFFICIENT_BUFFER"
    assert msg_q_status_name(42) == UNKNOWN_STR


def test_succ_fail_string():
    assert succ_fail_string(True) == "successful"
    assert succ_fail_string(0) == "failed"


def test_target_name_with_ssc():
    assert target_name(TARGET_MDM) == " GNSS_MDM with SSC"
    assert target_name(TARGET_DEFAULT) == " GNSS_MSM with SSC"


def test_target_name_without_ssc():
    assert target_name(TARGET_QCA1530) == " GNSS_QCA1530  without SSC"
    assert target_name(TARGET_UNKNOWN) == " GNSS_UNKNOWN  without SSC"


def test_target_name_out_of_range_is_unknown():
    assert target_name(0xFFFFFFFF) == " GNSS_UNKNOWN with SSC"


def test_get_timestamp_fixed_value():
    assert get_timestamp(3661.5) == "01:01:01.500000"


def test_get_timestamp_wraps_days():
    assert get_timestamp(86400 + 3661.5) == get_timestamp(3661.5)


def test_get_timestamp_format_now():
    stamp = get_timestamp()
    hours, minutes, seconds, fraction = _clock_fields(stamp)
    assert len(stamp) == 15
    assert 0 <= hours < 24 and 0 <= minutes < 60 and 0 <= seconds < 60
    assert len(fraction) == 6 and fraction.isdigit()


def test_get_time_milliseconds():
    stamp = get_time(1000.123)
    assert stamp.endswith(".123")
    assert stamp[:8] == time.strftime("%H:%M:%S", time.localtime(1000))


def test_get_time_format_now():
    stamp = get_time()
    hours, minutes, seconds, fraction = _clock_fields(stamp)
    assert len(stamp) == 12
    assert 0 <= hours < 24 and 0 <= minutes < 60 and 0 <= seconds < 61
    assert len(fraction) == 3 and fraction.isdigit()


def test_default_logger_enables_all_levels():
    log = LocLogger()
    assert all(log.enabled(level) for level in (LOG_E, LOG_W, LOG_I, LOG_D, LOG_V))


def test_configured_level_filters():
    log = LocLogger()
    log.configure(3, 0)
    assert log.enabled(LOG_I)
    assert log.enabled(LOG_E)
    assert not log.enabled(LOG_D)


def test_level_out_of_range_disables_everything():
    log = LocLogger(9, 0)
    assert not any(log.enabled(level) for level in (LOG_E, LOG_W, LOG_I, LOG_D, LOG_V))
    assert log.log(LOG_E, "dropped") is False


def test_user_build_clamps_level():
    log = LocLogger()
    log.configure(5, 0, user_build=True)
    assert log.debug_level == 2
    log.configure(1, 0, user_build=True)
    assert log.debug_level == 1


def test_enabled_rejects_bad_level():
    with pytest.raises(ValueError):
        LocLogger().enabled(0)


def test_in_range_messages_logged_as_errors(caplog):
    log = LocLogger(4, 0)
    with caplog.at_level(logging.DEBUG, logger=log_util.logger.name):
        assert log.log(LOG_D, "hello") is True
    assert [(r.levelno, r.getMessage()) for r in caplog.records] == [(logging.ERROR, "D/hello")]


def test_default_level_uses_host_levels(caplog):
    log = LocLogger()
    with caplog.at_level(logging.DEBUG, logger=log_util.logger.name):
        log.log(LOG_W, "careful")
    assert [(r.levelno, r.getMessage()) for r in caplog.records] == [(logging.WARNING, "W/careful")]


def test_timestamp_prefix(caplog):
    log = LocLogger(5, 1)
    with caplog.at_level(logging.DEBUG, logger=log_util.logger.name):
        written = log.log(LOG_I, "msg")
    assert written is True
    message = caplog.records[0].getMessage()
    prefix, _, body = message.partition("] ")
    assert body == "I/msg"
    assert prefix[0] == "["
    hours, minutes, seconds, fraction = _clock_fields(prefix[1:])
    assert 0 <= hours < 24 and 0 <= minutes < 60 and 0 <= seconds < 60
    assert len(fraction) == 6