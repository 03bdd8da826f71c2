from __future__ import annotations

# Standard Library Imports
from datetime import datetime, timedelta, timezone

# Third Party Imports
import pytest
from numpy import isclose

# CHRONOSCALE Imports
from chronoscale.common.exceptions import InvalidGregorianDate, UnsupportedScaleForInstant
from chronoscale.time.duration import Duration, Unit
from chronoscale.time.epoch import Epoch
from chronoscale.time.leap_seconds import LeapSecondEntry, LeapSecondTable, setLeapSecondTable
from chronoscale.time.scales import TimeScale

# Local Imports
from .. import GPS_EPOCH, J2000, TAI_2016_LEAP_START, TAI_2017_JAN_01


@pytest.fixture(name="leap_second")
def fixtureLeapSecond() -> Epoch:
    """Return the 2016-12-31T23:59:60 UTC leap second."""
    return Epoch.fromGregorianUtc(2016, 12, 31, 23, 59, 60)


class TestConstruction:
    """Test building epochs from the supported representations."""

    def testTai(self):
        """Test the TAI constructors & accessors."""
        epoch = Epoch.fromTaiSeconds(3_155_716_800)
        assert epoch.tai == J2000
        assert epoch == Epoch.fromTaiDuration(J2000)
        assert epoch == Epoch.fromTaiParts(*J2000.toParts())
        assert epoch.toTaiParts() == J2000.toParts()
        assert epoch.toTaiSeconds() == 3_155_716_800.0
        assert epoch.toTaiDays() == 36_524.5
        assert Epoch.fromTaiDays(36_524.5) == epoch

    def testTypeCheck(self):
        """Test that an epoch wraps a duration only."""
        with pytest.raises(TypeError):
            Epoch(1.0)

    def test1972(self):
        """Test UTC 1972-01-01 is TAI 1972-01-01T00:00:10."""
        utc = Epoch.fromGregorianUtcAtMidnight(1972, 1, 1)
        assert utc == Epoch.fromGregorianTai(1972, 1, 1, 0, 0, 10)
        assert utc == Epoch.fromUtcDays(26_297.0)
        assert utc.toUtcDays() == 26_297.0
        assert utc.leapSeconds() == 10

    def testUtcSeconds(self):
        """Test the UTC second count."""
        epoch = Epoch.fromUtcSeconds(3_692_217_600)
        assert epoch.tai == Unit.SECOND * TAI_2017_JAN_01
        assert epoch.toUtcSeconds() == 3_692_217_600.0

    def testUnix(self):
        """Test UNIX time."""
        assert Epoch.fromUnixSeconds(0) == Epoch.fromGregorianUtcAtMidnight(1970, 1, 1)
        epoch = Epoch.fromGregorianUtcAtMidnight(2017, 1, 1)
        assert epoch.toUnixSeconds() == 1_483_228_800.0
        assert epoch.toUnixMilliseconds() == 1_483_228_800_000.0
        assert Epoch.fromUnixMilliseconds(1_483_228_800_000) == epoch
        assert Epoch.fromUnixSeconds(1_483_228_800.5) == epoch + Unit.MILLISECOND * 500

    def testJulianDates(self):
        """Test Julian & Modified Julian dates."""
        epoch = Epoch.fromGregorianTai(2020, 1, 1)
        assert epoch.toJdeTaiDays() == 2_458_849.5
        assert Epoch.fromJdeTai(2_458_849.5) == epoch
        assert epoch.toMjdTaiDays() == 58_849.0
        assert Epoch.fromMjdTai(58_849.0) == epoch
        assert Epoch.fromMjdTai(51_544.5).tai == J2000

        utc = Epoch.fromGregorianUtcAtMidnight(2017, 1, 1)
        assert Epoch.fromMjdUtc(57_754.0) == utc
        assert Epoch.fromJdeUtc(2_457_754.5) == utc
        assert utc.toMjdUtcDays() == 57_754.0
        assert utc.toJdeUtcDays() == 2_457_754.5

    def testDynamicalScales(self):
        """Test TT, ET & TDB accessors at J2000."""
        epoch = Epoch.fromGregorian(2000, 1, 1, 12, scale=TimeScale.TT)
        assert epoch.toTtSeconds() == 3_155_716_800.0
        assert epoch.toEtSeconds() == 0.0
        assert epoch.toTtCenturiesJ2000() == 0.0
        assert epoch.toJdeTtDays() == 2_451_545.0
        assert epoch == Epoch.fromEtSeconds(0)
        assert epoch == Epoch.fromTtSeconds(3_155_716_800)
        assert abs(epoch.toTdbSeconds()) < 1.66e-3

        tdb = Epoch.fromTdbSeconds(0)
        assert abs(tdb.toTdbSeconds()) < 1e-8
        assert isclose(tdb.toJdeTdbDays(), 2_451_545.0, rtol=0.0, atol=1e-9)
        assert abs(tdb - epoch) < Unit.MICROSECOND * 1_659

    def testGps(self):
        """Test the GPS constructors & accessors."""
        epoch = Epoch.fromGregorianUtcAtMidnight(1980, 1, 6)
        assert epoch.tai == GPS_EPOCH
        assert epoch == Epoch.fromGpsSeconds(0)
        assert epoch.toGpsSeconds() == 0.0
        assert Epoch.fromGpsDays(7).toGpsDays() == 7.0
        assert Epoch.fromGpsNanoseconds(123_456_789).toGpsNanoseconds() == 123_456_789
        assert (epoch + Duration.EPSILON).toGpsNanoseconds() == 1

    def testGpsBeforeEpoch(self):
        """Test GPS time isn't available before the GPS epoch."""
        epoch = Epoch.fromGregorianUtcAtMidnight(1980, 1, 1)
        with pytest.raises(UnsupportedScaleForInstant):
            epoch.toGpsSeconds()
        with pytest.raises(UnsupportedScaleForInstant):
            Epoch(GPS_EPOCH - Duration.EPSILON).toGpsNanoseconds()
        with pytest.raises(UnsupportedScaleForInstant):
            Epoch.fromGpsSeconds(-1)

    def testNow(self):
        """Test the host clock constructor."""
        now = Epoch.now()
        reference = Epoch.fromDatetime(datetime.now(timezone.utc))
        assert abs(reference - now) < Unit.SECOND * 5


class TestScaleRoundTrip:
    """Test the generic scale interface."""

    @pytest.mark.parametrize("scale", [TimeScale.TAI, TimeScale.UTC, TimeScale.TT, TimeScale.ET, TimeScale.GPS])
    @pytest.mark.parametrize("offset", [Duration.ZERO, Unit.NANOSECOND * 1, Unit.MILLISECOND * 999])
    def testExact(self, scale: TimeScale, offset: Duration):
        """Test exact scales round trip bit for bit, including around the 2016 leap second."""
        for seconds in (TAI_2016_LEAP_START - 1, TAI_2016_LEAP_START, TAI_2017_JAN_01):
            epoch = Epoch(Unit.SECOND * seconds + offset)
            duration = epoch.toScale(scale)
            leap_second = scale is TimeScale.UTC and epoch.isLeapSecond()
            assert Epoch.fromScale(duration, scale, leap_second=leap_second) == epoch

    def testTdb(self):
        """Test TDB round trips well within its documented tolerance."""
        epoch = Epoch.fromGregorianTai(2024, 2, 29, 6, 30, 0, 123_456_789)
        back = Epoch.fromScale(epoch.toScale(TimeScale.TDB), TimeScale.TDB)
        assert abs(back - epoch) <= Unit.NANOSECOND * 10


class TestLeapSeconds:
    """Test epochs during & around leap seconds."""

    def testLeapSecond(self, leap_second: Epoch):
        """Test 2016-12-31T23:59:60 UTC."""
        assert leap_second.tai == Unit.SECOND * TAI_2016_LEAP_START
        assert leap_second.isLeapSecond()
        assert leap_second.leapSeconds() == 36
        assert leap_second.toGregorian() == (2016, 12, 31, 23, 59, 60, 0)

        after = Epoch.fromGregorianUtcAtMidnight(2017, 1, 1)
        before = Epoch.fromGregorianUtc(2016, 12, 31, 23, 59, 59)
        assert after - leap_second == Unit.SECOND * 1
        assert leap_second - before == Unit.SECOND * 1
        assert not after.isLeapSecond()
        assert after.leapSeconds() == 37

    def testInsideLeapSecond(self, leap_second: Epoch):
        """Test fractions of the leap second read as second 60."""
        epoch = leap_second + Unit.MILLISECOND * 250
        assert epoch.toGregorian() == (2016, 12, 31, 23, 59, 60, 250_000_000)
        assert Epoch.fromGregorianUtc(2016, 12, 31, 23, 59, 60, 250_000_000) == epoch

    def testInvalidLeapSecond(self):
        """Test second 60 on days without a leap second."""
        with pytest.raises(InvalidGregorianDate):
            Epoch.fromGregorianUtc(2017, 12, 31, 23, 59, 60)
        with pytest.raises(InvalidGregorianDate):
            Epoch.fromGregorianTai(2016, 12, 31, 23, 59, 60)

    def testDatetimeClamp(self, leap_second: Epoch):
        """Test that ``datetime`` can't hold second 60."""
        assert leap_second.toDatetime() == datetime(2016, 12, 31, 23, 59, 59, 999_999, tzinfo=timezone.utc)

    def testExplicitTable(self):
        """Test that a table passed in is used instead of the active one."""
        table = LeapSecondTable.builtin().withEntry(
            LeapSecondEntry(Unit.SECOND * (3_881_520_000 + 38), 38),
        )
        epoch = Epoch.fromGregorianUtc(2022, 12, 31, 23, 59, 60, table=table)
        assert epoch.isLeapSecond(table)
        assert epoch.leapSeconds(table) == 37
        assert epoch.toGregorian(table=table) == (2022, 12, 31, 23, 59, 60, 0)
        assert not epoch.isLeapSecond()

    def testActiveTable(self):
        """Test that installing a table changes later conversions."""
        table = LeapSecondTable.builtin().withEntry(
            LeapSecondEntry(Unit.SECOND * (3_881_520_000 + 38), 38),
        )
        epoch = Epoch.fromGregorianUtcAtMidnight(2023, 1, 1)
        assert epoch.leapSeconds() == 37

        setLeapSecondTable(table)
        assert Epoch.fromGregorianUtcAtMidnight(2023, 1, 1) == epoch + Unit.SECOND * 1
        assert epoch.leapSeconds() == 37
        assert (epoch + Unit.SECOND * 1).leapSeconds() == 38


class TestCivil:
    """Test Gregorian components & ``datetime``."""

    @pytest.mark.parametrize(
        "components",
        [
            (1900, 1, 1, 0, 0, 0, 0),
            (1972, 6, 30, 23, 59, 59, 999_999_999),
            (2000, 2, 29, 12, 0, 0, 1),
            (2038, 1, 19, 3, 14, 7, 0),
        ],
    )
    @pytest.mark.parametrize("scale", [TimeScale.TAI, TimeScale.UTC, TimeScale.TT, TimeScale.ET])
    def testRoundTrip(self, components: tuple[int, ...], scale: TimeScale):
        """Test civil components round trip through an epoch."""
        epoch = Epoch.fromGregorian(*components, scale=scale)
        assert epoch.toGregorian(scale) == components

    def testScaleReadings(self):
        """Test the same instant read on different clocks."""
        epoch = Epoch.fromGregorianUtcAtMidnight(2017, 1, 1)
        assert epoch.toGregorian(TimeScale.TAI) == (2017, 1, 1, 0, 0, 37, 0)
        assert epoch.toGregorian(TimeScale.GPS) == (2017, 1, 1, 0, 0, 18, 0)
        assert epoch.toGregorian(TimeScale.TT) == (2017, 1, 1, 0, 1, 9, 184_000_000)
        assert Epoch.fromGregorian(1980, 1, 6, scale=TimeScale.GPS).tai == GPS_EPOCH
        assert Epoch.fromGregorian(2000, 1, 1, 12, scale=TimeScale.ET).toEtSeconds() == 0.0

    def testNoon(self):
        """Test the noon constructor."""
        noon = Epoch.fromGregorianUtcAtNoon(2017, 1, 1)
        assert noon - Epoch.fromGregorianUtcAtMidnight(2017, 1, 1) == Unit.HOUR * 12

    def testInvalid(self):
        """Test impossible dates raise."""
        with pytest.raises(InvalidGregorianDate):
            Epoch.fromGregorianUtc(2019, 2, 29)
        with pytest.raises(ValueError, match="Invalid UTC date"):
            Epoch.fromGregorianUtc(2019, 1, 1, 25)

    def testDatetime(self):
        """Test conversions to & from ``datetime``."""
        epoch = Epoch.fromGregorianUtc(2017, 1, 1, 1, 2, 3, 4_005_006)
        aware = datetime(2017, 1, 1, 1, 2, 3, 4_005, tzinfo=timezone.utc)
        assert epoch.toDatetime() == aware
        assert Epoch.fromDatetime(aware) == epoch - Unit.NANOSECOND * 6
        assert Epoch.fromDatetime(aware.replace(tzinfo=None)) == Epoch.fromDatetime(aware)

        shifted = aware.astimezone(timezone(timedelta(hours=-5)))
        assert Epoch.fromDatetime(shifted) == Epoch.fromDatetime(aware)


class TestArithmetic:
    """Test epoch arithmetic, ordering & rounding."""

    def testShift(self):
        """Test adding & subtracting durations."""
        epoch = Epoch.fromGregorianTai(2020, 1, 1)
        later = epoch + Unit.DAY
        assert later == Epoch.fromGregorianTai(2020, 1, 2)
        assert Unit.DAY + epoch == later
        assert Unit.DAY * 1 + epoch == later
        assert later - Unit.DAY == epoch
        assert later - epoch == Unit.DAY * 1
        assert epoch - later == Unit.DAY * -1

    def testUnsupported(self):
        """Test epochs can't be added together or to plain numbers."""
        epoch = Epoch.fromGregorianTai(2020, 1, 1)
        with pytest.raises(TypeError):
            _ = epoch + epoch
        with pytest.raises(TypeError):
            _ = epoch + 1.0

    def testSaturation(self):
        """Test shifting past the representable range saturates."""
        epoch = Epoch(Duration.MAX)
        assert (epoch + Unit.DAY).tai == Duration.MAX
        assert (epoch + Unit.DAY).tai.isSaturated()

    def testOrdering(self):
        """Test epochs are ordered by their TAI duration."""
        first = Epoch.fromGregorianTai(2020, 1, 1)
        second = first + Duration.EPSILON
        assert first < second
        assert first <= second
        assert second > first
        assert second >= first
        assert first != second
        assert first == Epoch.fromTaiDuration(first.tai)
        assert len({first, Epoch.fromTaiDuration(first.tai), second}) == 2
        assert (first == first.tai) is False
        assert "Epoch(" in repr(first)

    def testRounding(self):
        """Test rounding an epoch to a step."""
        epoch = Epoch.fromGregorianTai(2020, 1, 1, 12, 34, 56, 789)
        assert epoch.floor(Unit.HOUR) == Epoch.fromGregorianTai(2020, 1, 1, 12)
        assert epoch.ceil(Unit.HOUR) == Epoch.fromGregorianTai(2020, 1, 1, 13)
        assert epoch.round(Unit.MINUTE) == Epoch.fromGregorianTai(2020, 1, 1, 12, 35)
        assert epoch.floor(Duration.ZERO) == epoch
