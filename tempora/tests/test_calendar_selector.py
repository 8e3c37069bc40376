from tempora.domain.schemas.calendar import CalendarRef
from tempora.services.calendar.selector import CalendarChoice, calendar_label, select_default


def _cal(id: int, type: str, title: str = "Calendar") -> CalendarRef:
    return CalendarRef(id=id, title=title, type=type)


def test_select_default_prefers_main_calendar() -> None:
    calendars = [_cal(1, "work"), _cal(2, "main"), _cal(3, "work")]
    assert select_default(calendars) == 2


def test_select_default_falls_back_to_first() -> None:
    assert select_default([_cal(1, "work")]) == 1


def test_select_default_empty_list() -> None:
    assert select_default([]) is None


def test_choice_defaults_once_list_arrives() -> None:
    choice = CalendarChoice()
    assert choice.offer([]) is None
    assert choice.offer([_cal(4, "work"), _cal(5, "main")]) == 5
    # a later list does not move an already chosen calendar
    assert choice.offer([_cal(9, "main")]) == 5


def test_choice_never_overrides_explicit_pick() -> None:
    choice = CalendarChoice()
    choice.choose(7)
    assert choice.offer([_cal(1, "main")]) == 7
    assert choice.explicit is True


def test_calendar_label_truncates_long_titles() -> None:
    calendars = [_cal(1, "main", "Team planning and retrospectives"), _cal(2, "work", "Short")]
    assert calendar_label(calendars, 1) == "Team planning and re..."
    assert calendar_label(calendars, 2) == "Short"
    assert calendar_label(calendars, None) == "Calendar"
    assert calendar_label(calendars, 99) == "Calendar"
