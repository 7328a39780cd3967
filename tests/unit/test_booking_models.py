from tracking import t

from bookings.models import EQUIPMENT_LIST, Booking, FormDraft, NewBooking, get_equipment
from bookings.schedule import board_for, count_bookings, schedule_for
from tests.helpers import make_booking


def test_catalog_has_projector_and_mobile_screen_in_order():
    t('tests.unit.test_booking_models.test_catalog_has_projector_and_mobile_screen_in_order')
    assert [item.id for item in EQUIPMENT_LIST] == ["projector", "mobile-screen"]
    assert get_equipment("projector").label == "📽️ 投影機"
    assert get_equipment("missing") is None


def test_new_booking_document_uses_collection_field_names():
    t('tests.unit.test_booking_models.test_new_booking_document_uses_collection_field_names')
    payload = NewBooking("Bob", "projector", "2025-06-01", "09:00", "10:00", "pw", "2025-05-30T00:00:00")
    assert payload.to_document() == {
        "userName": "Bob",
        "equipmentId": "projector",
        "date": "2025-06-01",
        "startTime": "09:00",
        "endTime": "10:00",
        "password": "pw",
        "createdAt": "2025-05-30T00:00:00",
    }


def test_booking_from_partial_document_fills_blanks():
    t('tests.unit.test_booking_models.test_booking_from_partial_document_fills_blanks')
    booking = Booking.from_document("abc", {"userName": "Eve", "startTime": None})
    assert booking.id == "abc"
    assert booking.user_name == "Eve"
    assert booking.start_time == ""
    assert booking.password == ""


def test_form_draft_defaults_and_trimmed_payload():
    t('tests.unit.test_booking_models.test_form_draft_defaults_and_trimmed_payload')
    draft = FormDraft(user_name="  Bob  ", equipment_id="projector", date="2025-06-01", password=" pw ")
    assert (draft.start_time, draft.end_time) == ("09:00", "10:00")

    payload = draft.to_new_booking(created_at="now")
    assert payload.user_name == "Bob"
    # Passwords are stored exactly as typed
    assert payload.password == " pw "
    assert payload.created_at == "now"


def test_schedule_for_filters_by_equipment_and_date_keeping_order():
    t('tests.unit.test_booking_models.test_schedule_for_filters_by_equipment_and_date_keeping_order')
    bookings = [
        make_booking("a", start_time="09:00", end_time="10:00"),
        make_booking("b", equipment_id="mobile-screen"),
        make_booking("c", start_time="13:00", end_time="14:00"),
        make_booking("d", date="2025-06-02"),
    ]
    assert [item.id for item in schedule_for("projector", "2025-06-01", bookings)] == ["a", "c"]


def test_board_lists_every_equipment_including_free_ones():
    t('tests.unit.test_booking_models.test_board_lists_every_equipment_including_free_ones')
    bookings = [make_booking("a"), make_booking("b", date="2025-06-02", equipment_id="mobile-screen")]
    board = board_for("2025-06-01", bookings)

    assert [schedule.equipment.id for schedule in board] == ["projector", "mobile-screen"]
    assert [item.id for item in board[0].bookings] == ["a"]
    assert board[1].is_free
    assert count_bookings(bookings) == 2
