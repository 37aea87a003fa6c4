"""Test band statistics and scoring."""

from bandstats.aggregate import BandStat, aggregate_band_stats, dx_percentage, score_band
from bandstats.config import ScoreTier

TIERS = [
    ScoreTier(score=5, spot_count=10, avg_snr=5, dx_percentage=10),
    ScoreTier(score=1, spot_count=0, avg_snr=-999, dx_percentage=0),
]


def add_spot(ctx, sender, receiver, band="20", snr=0):
    ctx.store.insert_spot(sender, receiver, band, snr, "2024-05-01T12:00:00+00:00")


def stats_by_grid(stats):
    return {(s.grid_code, s.band): s for s in stats}


class TestArithmetic:
    """Pure helpers"""

    def test_dx_percentage(self):
        assert dx_percentage(1, 5) == 20
        assert dx_percentage(1, 3) == 33  # truncated, not rounded
        assert dx_percentage(2, 3) == 66
        assert dx_percentage(3, 3) == 100
        assert dx_percentage(0, 0) == 0

    def test_score_first_matching_tier(self):
        # sender 8 + receiver 4, avg SNR 6, DX 15%
        assert score_band(TIERS, 12, 6, 15) == 5

    def test_score_falls_through_to_later_tier(self):
        assert score_band(TIERS, 12, 4, 15) == 1

    def test_score_tier_order_is_configured_order(self):
        assert score_band(list(reversed(TIERS)), 12, 6, 15) == 1

    def test_no_matching_tier_is_none(self):
        assert score_band(TIERS[:1], 3, 0, 0) is None
        assert score_band([], 100, 100, 100) is None

    def test_band_stat_spot_count(self):
        stat = BandStat(grid_code="AA", band="20", spots_as_sender=3, spots_as_receiver=2, dx_count=1)
        assert stat.spot_count == 5
        assert stat.avg_snr is None
        assert stat.band_score is None


class TestAggregate:
    """Stats computed from spots in the database"""

    def test_quiet_band_pins_score_to_one(self, ctx):
        stats = stats_by_grid(aggregate_band_stats(ctx))
        for stat in stats.values():
            assert stat.spot_count == 0
            assert stat.dx_percentage == 0
            assert stat.avg_snr is None
            assert stat.band_score == 1

    def test_counts_and_dx(self, ctx):
        add_spot(ctx, "AA", "JN", snr=10)  # DX, AA sends
        add_spot(ctx, "AA", "BB", snr=-3)  # local to local
        add_spot(ctx, "AA", "BB", snr=-4)
        add_spot(ctx, "IO", "BB", snr=1)   # DX, BB receives
        add_spot(ctx, "JN", "AA", snr=0)   # DX, AA receives

        stats = stats_by_grid(aggregate_band_stats(ctx))

        aa = stats[("AA", "20")]
        assert (aa.spots_as_sender, aa.spots_as_receiver, aa.dx_count) == (3, 1, 2)
        assert aa.dx_percentage == 50
        # (10 - 3 - 4 + 0) / 4 = 0.75 truncates to 0
        assert aa.avg_snr == 0
        assert aa.band_score == 1

        bb = stats[("BB", "20")]
        assert (bb.spots_as_sender, bb.spots_as_receiver, bb.dx_count) == (0, 3, 1)
        assert bb.dx_percentage == 33
        # (-3 - 4 + 1) / 3 = -2
        assert bb.avg_snr == -2

    def test_local_to_local_is_not_dx(self, ctx):
        add_spot(ctx, "AA", "BB")
        stats = stats_by_grid(aggregate_band_stats(ctx))
        assert stats[("AA", "20")].dx_count == 0
        assert stats[("BB", "20")].dx_count == 0

    def test_negative_average_truncates_toward_zero(self, ctx):
        add_spot(ctx, "AA", "JN", snr=-3)
        add_spot(ctx, "AA", "JN", snr=-4)
        stats = stats_by_grid(aggregate_band_stats(ctx))
        assert stats[("AA", "20")].avg_snr == -3

    def test_top_tier(self, ctx):
        for _ in range(8):
            add_spot(ctx, "AA", "BB", snr=6)
        for _ in range(2):
            add_spot(ctx, "AA", "JN", snr=6)
        stats = stats_by_grid(aggregate_band_stats(ctx))
        aa = stats[("AA", "20")]
        assert aa.spot_count == 10
        assert aa.dx_percentage == 20
        assert aa.band_score == 5

    def test_unmatched_tier_stores_null_score(self, ctx):
        ctx.settings.score_tiers = TIERS[:1]
        add_spot(ctx, "AA", "JN", snr=-20)
        aggregate_band_stats(ctx)
        row = ctx.store.band_stats_for("AA")[0]
        assert row == ("AA", "20", 1, 0, 1, 100, -20, None)

    def test_one_row_per_grid_and_band(self, ctx):
        ctx.settings.bands = {"40": (7000, 7300), "20": (14000, 14350)}
        aggregate_band_stats(ctx)
        assert [row[1] for row in ctx.store.band_stats_for("AA")] == ["40", "20"]
        assert [row[1] for row in ctx.store.band_stats_for("BB")] == ["40", "20"]
