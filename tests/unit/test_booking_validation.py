from tracking import t

from bookings.errors import ConflictError, ValidationError
from bookings.validation import (
    FIELD_CONFLICT,
    FIELD_DATE,
    FIELD_EQUIPMENT_ID,
    FIELD_PASSWORD,
    FIELD_TIME,
    FIELD_USER_NAME,
    is_valid,
    validate,
)
from tests.helpers import DummyLogger, make_booking, make_draft


def test_complete_draft_without_bookings_is_valid():
    t('tests.unit.test_booking_validation.test_complete_draft_without_bookings_is_valid')
    errors = validate(make_draft(), [])
    assert errors == {}
    assert is_valid(errors)


def test_missing_fields_each_report_an_error():
    t('tests.unit.test_booking_validation.test_missing_fields_each_report_an_error')
    draft = make_draft(user_name="   ", equipment_id="", date="", password="")
    errors = validate(draft, [])

    assert set(errors) == {FIELD_USER_NAME, FIELD_EQUIPMENT_ID, FIELD_DATE, FIELD_PASSWORD}
    assert errors[FIELD_USER_NAME] == ValidationError(FIELD_USER_NAME, "Please enter the name for the booking")
    assert not is_valid(errors)


def test_unknown_equipment_is_rejected():
    t('tests.unit.test_booking_validation.test_unknown_equipment_is_rejected')
    errors = validate(make_draft(equipment_id="laser-cutter"), [])
    assert FIELD_EQUIPMENT_ID in errors


def test_end_must_be_after_start():
    t('tests.unit.test_booking_validation.test_end_must_be_after_start')
    for start, end in (("10:00", "10:00"), ("11:00", "10:00")):
        errors = validate(make_draft(start_time=start, end_time=end), [])
        assert errors[FIELD_TIME].code == FIELD_TIME
        assert errors[FIELD_TIME].message == "End time must be after start time"


def test_off_grid_times_report_time_grid_and_skip_conflicts():
    t('tests.unit.test_booking_validation.test_off_grid_times_report_time_grid_and_skip_conflicts')
    existing = [make_booking(start_time="09:00", end_time="10:00")]
    errors = validate(make_draft(start_time="09:15", end_time="09:45"), existing)

    assert errors[FIELD_TIME].code == "time_grid"
    assert FIELD_CONFLICT not in errors


def test_overlapping_booking_on_same_equipment_and_date_conflicts():
    t('tests.unit.test_booking_validation.test_overlapping_booking_on_same_equipment_and_date_conflicts')
    existing = [make_booking("b1", user_name="Alice", start_time="09:30", end_time="11:00")]
    logger = DummyLogger()

    errors = validate(make_draft(), existing, logger=logger)

    assert set(errors) == {FIELD_CONFLICT}
    conflict = errors[FIELD_CONFLICT]
    assert isinstance(conflict, ConflictError)
    assert conflict.user_name == "Alice"
    assert conflict.booking_id == "b1"
    assert conflict.message == "Time conflict! Already booked by Alice"
    assert logger.levels() == ["debug"]


def test_half_hour_overlap_with_bobs_booking_is_rejected_and_next_slot_accepted():
    t('tests.unit.test_booking_validation.test_half_hour_overlap_with_bobs_booking_is_rejected_and_next_slot_accepted')
    existing = [make_booking("b1", user_name="Bob", start_time="09:00", end_time="10:00")]

    overlapping = validate(make_draft(user_name="Carol", start_time="09:30", end_time="10:30"), existing)
    assert set(overlapping) == {FIELD_CONFLICT}
    assert overlapping[FIELD_CONFLICT].user_name == "Bob"

    following = validate(make_draft(user_name="Carol", start_time="10:00", end_time="11:00"), existing)
    assert following == {}


def test_touching_booking_is_not_a_conflict():
    t('tests.unit.test_booking_validation.test_touching_booking_is_not_a_conflict')
    existing = [
        make_booking("b1", start_time="08:00", end_time="09:00"),
        make_booking("b2", start_time="10:00", end_time="11:00"),
    ]
    assert validate(make_draft(start_time="09:00", end_time="10:00"), existing) == {}


def test_other_equipment_or_date_never_conflicts():
    t('tests.unit.test_booking_validation.test_other_equipment_or_date_never_conflicts')
    existing = [
        make_booking("b1", equipment_id="mobile-screen"),
        make_booking("b2", date="2025-06-02"),
    ]
    assert validate(make_draft(), existing) == {}


def test_only_first_conflict_in_snapshot_order_is_reported():
    t('tests.unit.test_booking_validation.test_only_first_conflict_in_snapshot_order_is_reported')
    existing = [
        make_booking("b1", user_name="Alice", start_time="08:30", end_time="09:30"),
        make_booking("b2", user_name="Carol", start_time="09:30", end_time="10:30"),
    ]
    errors = validate(make_draft(start_time="09:00", end_time="10:00"), existing)

    assert errors[FIELD_CONFLICT].user_name == "Alice"
    assert len([key for key in errors if key == FIELD_CONFLICT]) == 1


def test_conflict_is_reported_alongside_other_errors():
    t('tests.unit.test_booking_validation.test_conflict_is_reported_alongside_other_errors')
    existing = [make_booking("b1", user_name="Alice")]
    errors = validate(make_draft(user_name="", password=""), existing)
    assert {FIELD_USER_NAME, FIELD_PASSWORD, FIELD_CONFLICT} <= set(errors)


def test_malformed_stored_booking_cannot_block():
    t('tests.unit.test_booking_validation.test_malformed_stored_booking_cannot_block')
    existing = [make_booking("bad", start_time="", end_time="")]
    assert validate(make_draft(), existing) == {}
