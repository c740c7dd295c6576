from datetime import date

from rankboard.navigation.date_navigator import WEEKDAY_HEADERS, DateNavigator, market_today

TODAY = date(2026, 10, 19)


def _nav():
    return DateNavigator(today_fn=lambda: TODAY)


def test_defaults_to_today():
    nav = _nav()
    assert nav.selected_date == "2026-10-19"
    assert (nav.view_year, nav.view_month) == (2026, 10)


def test_month_grid_leading_blanks():
    nav = _nav()
    grid = nav.month_grid()
    # 1 October 2026 is a Thursday: Sun..Wed are blank
    assert grid[:4] == [None, None, None, None]
    assert grid[4] == date(2026, 10, 1)
    assert grid[-1] == date(2026, 10, 31)
    assert len(grid) == 4 + 31


def test_month_starting_on_sunday_has_no_blanks():
    nav = _nav()
    nav.change_month(-7)  # March 2026 starts on a Sunday
    assert (nav.view_year, nav.view_month) == (2026, 3)
    assert nav.month_grid()[0] == date(2026, 3, 1)


def test_change_month_wraps_years():
    nav = _nav()
    nav.change_month(3)
    assert (nav.view_year, nav.view_month) == (2027, 1)
    nav.change_month(-13)
    assert (nav.view_year, nav.view_month) == (2025, 12)


def test_select_past_and_today():
    nav = _nav()
    assert nav.select(date(2026, 10, 2)) is True
    assert nav.selected_date == "2026-10-02"
    assert nav.select(TODAY) is True
    assert nav.selected_date == "2026-10-19"


def test_future_and_blank_rejected():
    nav = _nav()
    assert nav.select(date(2026, 10, 20)) is False
    assert nav.select(None) is False
    assert nav.selected_date == "2026-10-19"


def test_headers_start_on_sunday():
    assert WEEKDAY_HEADERS[0] == "Sun"
    assert len(WEEKDAY_HEADERS) == 7


def test_market_today_returns_date():
    assert isinstance(market_today("UTC"), date)
