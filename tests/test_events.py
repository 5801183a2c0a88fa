from datetime import timedelta

from conftest import EPOCH, FixedDraw
from dailyschedule.core.rng import RNG
from dailyschedule.schedule import DynamicEvent, Filter, FixedEvent, FuzzyEvent, Moment, StableWindow, UtcMoment

UTC = StableWindow(timedelta(0))
H = timedelta(hours=1)


def test_fuzzy_draw_offsets_from_earlier_moment():
  event = FuzzyEvent(Filter.ALWAYS, Moment.at(3), Moment.at(2))
  assert event.compute(EPOCH, UTC, FixedDraw(0)) == EPOCH + 2 * H
  assert event.compute(EPOCH, UTC, FixedDraw(10**9)) == EPOCH + 3 * H - timedelta(seconds=1)


def test_fuzzy_equal_moments():
  event = FuzzyEvent(Filter.ALWAYS, Moment.at(2), Moment.at(2))
  assert event.compute(EPOCH, UTC, FixedDraw(5)) == EPOCH + 2 * H


def test_fuzzy_mixed_anchors():
  window = StableWindow(H)
  event = FuzzyEvent(Filter.ALWAYS, Moment.at(7), UtcMoment(5 * H))
  # local 07:00 at +01:00 is 06:00 UTC
  assert event.compute(EPOCH, window, FixedDraw(0)) == EPOCH + 5 * H
  assert event.compute(EPOCH, window, FixedDraw(3599)) == EPOCH + 6 * H - timedelta(seconds=1)


def test_dynamic_jitter_is_centered():
  event = DynamicEvent(Filter.ALWAYS, lambda ref: Moment.at(12), timedelta(minutes=2))
  noon = EPOCH + 12 * H
  assert event.compute(EPOCH, UTC, FixedDraw(0)) == noon + timedelta(seconds=60)
  assert event.compute(EPOCH, UTC, FixedDraw(60)) == noon
  assert event.compute(EPOCH, UTC, FixedDraw(119)) == noon - timedelta(seconds=59)


def test_dynamic_odd_jitter_stays_on_whole_seconds():
  event = DynamicEvent(Filter.ALWAYS, lambda ref: Moment.at(12), timedelta(seconds=7))
  noon = EPOCH + 12 * H
  assert event.compute(EPOCH, UTC, FixedDraw(0)) == noon + timedelta(seconds=3)
  assert event.compute(EPOCH, UTC, FixedDraw(6)) == noon - timedelta(seconds=3)
  assert event.compute(EPOCH, UTC, FixedDraw(3)).microsecond == 0


def test_dynamic_jitter_range_with_rng():
  event = DynamicEvent(Filter.ALWAYS, lambda ref: Moment.at(12), timedelta(minutes=10))
  rng = RNG(7)
  noon = EPOCH + 12 * H
  for _ in range(200):
    ts = event.compute(EPOCH, UTC, rng)
    assert noon - timedelta(minutes=5) < ts <= noon + timedelta(minutes=5)


def test_dynamic_receives_reference():
  seen = []

  def func(ref):
    seen.append(ref)
    return Moment.at(1)

  DynamicEvent(Filter.ALWAYS, func).compute(EPOCH, UTC, FixedDraw(0))
  assert seen == [EPOCH]


def test_filter_rejection_returns_none():
  saturday = EPOCH + timedelta(days=2)
  event = FixedEvent(Filter.WEEKDAYS, Moment.at(8))
  assert event.compute(saturday, UTC, FixedDraw(0)) is None
  assert FixedEvent(Filter.WEEKEND, Moment.at(8)).compute(saturday, UTC, FixedDraw(0)) == saturday + 8 * H


def test_filter_uses_local_day():
  # Friday 23:30 UTC is Saturday 00:30 at +01:00
  friday = EPOCH + timedelta(days=1)
  event = FixedEvent(Filter.WEEKEND, UtcMoment(timedelta(hours=23, minutes=30)))
  assert event.compute(friday, StableWindow(H), FixedDraw(0)) == friday + timedelta(hours=23, minutes=30)
  assert event.compute(friday, UTC, FixedDraw(0)) is None


def test_descriptors():
  assert str(FixedEvent(Filter.ALWAYS, Moment.at(2))) == "Fixed 02:00:00"
  assert str(FuzzyEvent(Filter.ALWAYS, Moment.at(6, 20), Moment.at(6, 40))) == "Fuzzy 06:20:00 ~ 06:40:00"
  assert str(DynamicEvent(Filter.ALWAYS, lambda ref: Moment.at(0), timedelta(minutes=2))) == "Dynamic ~120s"
