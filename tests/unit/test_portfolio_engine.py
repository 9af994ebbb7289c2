"""
Unit tests for the position reconstruction engine.

Tests cover:
- Moving-average cost on buys, including fees
- Realized P&L on sells and the quantity floor at zero
- Dividends and the "not applicable" percentage
- Same-day ordering and order independence of the input
- Holdings table with snapshot fallback
- Buy lots view
"""

from datetime import date
from decimal import Decimal

from cartera.domain.models import Holding, PositionState
from cartera.services.portfolio_engine import (
    apply_transaction,
    build_holdings_table,
    build_lots,
    replay_all,
    replay_positions,
    sort_chronologically,
)

from tests.conftest import assert_decimal_equal, buy, dividend, sell


# =============================================================================
# REPLAY TESTS
# =============================================================================


class TestReplayPositions:
    """Tests for single-ticker replay."""

    def test_buy_then_sell_realizes_against_average_cost(self):
        """
        GIVEN buy 10 @ 100 (no fees) then sell 4 @ 120 (fees 1)
        AND current price 130
        WHEN I replay the ticker
        THEN the sell realizes (120 - 100) * 4 - 1 = 79
        AND 6 shares remain at average cost 100
        AND unrealized = (130 - 100) * 6 = 180, total = 259
        """
        txs = [
            buy("AAPL", date(2024, 1, 10), "10", "100", "0"),
            sell("AAPL", date(2024, 2, 10), "4", "120", "1"),
        ]

        ledger = replay_positions("AAPL", txs, Decimal("130"))

        assert ledger.quantity == Decimal("6")
        assert ledger.avg_cost == Decimal("100")
        assert ledger.realized_pnl == Decimal("79")
        assert ledger.unrealized_pnl == Decimal("180")
        assert ledger.total_pnl == Decimal("259")
        assert ledger.rows[1].pnl == Decimal("79")

    def test_dividend_without_position_has_no_percentage(self):
        """
        GIVEN a dividend of 50 before any buy
        WHEN I replay the ticker
        THEN its pnl is 50 and its pct is not applicable (None, not zero)
        """
        ledger = replay_positions("KO", [dividend("KO", date(2024, 1, 5), "50")], Decimal("60"))

        row = ledger.rows[0]
        assert row.pnl == Decimal("50")
        assert row.pct is None
        assert ledger.realized_pnl == Decimal("50")

    def test_dividend_percentage_uses_cost_base(self):
        txs = [
            buy("KO", date(2024, 1, 5), "10", "50"),
            dividend("KO", date(2024, 3, 5), "25"),
        ]

        ledger = replay_positions("KO", txs, Decimal("60"))

        assert ledger.rows[1].pct == Decimal("25") / Decimal("500")

    def test_fees_are_capitalized_into_average_cost(self):
        """
        GIVEN buy 10 @ 100 with fees 10 and buy 10 @ 120 without fees
        WHEN I replay the ticker
        THEN avg cost = (1000 + 10 + 1200) / 20 = 110.5
        """
        txs = [
            buy("AAPL", date(2024, 1, 1), "10", "100", "10"),
            buy("AAPL", date(2024, 1, 2), "10", "120"),
        ]

        ledger = replay_positions("AAPL", txs, Decimal("100"))

        assert ledger.avg_cost == Decimal("110.5")
        assert ledger.quantity == Decimal("20")

    def test_sell_keeps_average_cost(self):
        txs = [
            buy("AAPL", date(2024, 1, 1), "10", "100"),
            buy("AAPL", date(2024, 1, 2), "10", "200"),
            sell("AAPL", date(2024, 1, 3), "5", "300"),
        ]

        ledger = replay_positions("AAPL", txs, Decimal("100"))

        assert ledger.avg_cost == Decimal("150")

    def test_oversell_floors_quantity_at_zero(self):
        """
        GIVEN buy 5 then sell 8
        WHEN I replay the ticker
        THEN quantity is 0, never negative
        """
        txs = [
            buy("AAPL", date(2024, 1, 1), "5", "100"),
            sell("AAPL", date(2024, 1, 2), "8", "110"),
        ]

        ledger = replay_positions("AAPL", txs, Decimal("120"))

        assert ledger.quantity == Decimal("0")
        assert ledger.unrealized_pnl == Decimal("0")

    def test_buy_row_marks_lot_against_its_own_price(self):
        """
        GIVEN buy 10 @ 100 then buy 10 @ 200, current price 150
        WHEN I replay the ticker
        THEN the rows show +500 and -500 measured per lot price
        """
        txs = [
            buy("AAPL", date(2024, 1, 1), "10", "100"),
            buy("AAPL", date(2024, 1, 2), "10", "200"),
        ]

        ledger = replay_positions("AAPL", txs, Decimal("150"))

        assert [r.pnl for r in ledger.rows] == [Decimal("500"), Decimal("-500")]
        assert ledger.rows[0].pct == Decimal("0.5")
        assert ledger.rows[1].pct == Decimal("-0.25")

    def test_zero_price_buy_has_zero_percentage(self):
        ledger = replay_positions("GIFT", [buy("GIFT", date(2024, 1, 1), "3", "0")], Decimal("10"))

        assert ledger.rows[0].pct == Decimal("0")
        assert ledger.avg_cost == Decimal("0")

    def test_missing_fields_count_as_zero(self):
        txs = [buy("AAPL", date(2024, 1, 1), None, "100")]

        ledger = replay_positions("AAPL", txs, Decimal("100"))

        assert ledger.quantity == Decimal("0")
        assert ledger.avg_cost == Decimal("0")

    def test_missing_current_price_counts_as_zero(self):
        ledger = replay_positions("AAPL", [buy("AAPL", date(2024, 1, 1), "2", "10")], None)

        assert ledger.current_price == Decimal("0")
        assert ledger.unrealized_pnl == Decimal("-20")

    def test_input_order_does_not_change_result(self):
        txs = [
            buy("AAPL", date(2024, 1, 1), "10", "100"),
            sell("AAPL", date(2024, 2, 1), "4", "120", "1"),
            dividend("AAPL", date(2024, 3, 1), "7"),
        ]

        forward = replay_positions("AAPL", txs, Decimal("130"))
        backward = replay_positions("AAPL", list(reversed(txs)), Decimal("130"))

        assert forward.realized_pnl == backward.realized_pnl
        assert forward.quantity == backward.quantity
        assert forward.avg_cost == backward.avg_cost


class TestOrdering:
    """Tests for chronological ordering."""

    def test_same_day_transactions_keep_input_order(self):
        first = buy("AAPL", date(2024, 1, 1), "1", "100")
        second = sell("AAPL", date(2024, 1, 1), "1", "110")
        earlier = buy("AAPL", date(2023, 12, 31), "1", "90")

        ordered = sort_chronologically([first, second, earlier])

        assert ordered == [earlier, first, second]

    def test_same_day_sell_before_buy_is_replayed_as_listed(self):
        """
        GIVEN a same-day sell listed before the buy
        WHEN I replay the ticker
        THEN the sell sees an empty position and the buy remains open
        """
        txs = [
            sell("AAPL", date(2024, 1, 1), "5", "110"),
            buy("AAPL", date(2024, 1, 1), "5", "100"),
        ]

        ledger = replay_positions("AAPL", txs, Decimal("100"))

        assert ledger.quantity == Decimal("5")
        assert ledger.realized_pnl == Decimal("550")


class TestApplyTransaction:
    """Tests for the single-step fold."""

    def test_returns_new_state(self):
        state = PositionState()

        next_state, row = apply_transaction(state, buy("AAPL", date(2024, 1, 1), "2", "50"), Decimal("60"))

        assert state.quantity == Decimal("0")
        assert next_state.quantity == Decimal("2")
        assert row.pnl == Decimal("20")

    def test_sell_without_cost_base_has_zero_percentage(self):
        _, row = apply_transaction(PositionState(), sell("AAPL", date(2024, 1, 1), "2", "50"), Decimal("60"))

        assert row.pnl == Decimal("100")
        assert row.pct == Decimal("0")


class TestReplayAll:
    """Tests for the cross-ticker replay."""

    def test_states_are_kept_per_ticker(self):
        txs = [
            buy("AAPL", date(2024, 1, 1), "10", "100"),
            buy("MSFT", date(2024, 1, 2), "2", "300"),
            sell("AAPL", date(2024, 1, 3), "5", "110"),
        ]

        states, rows = replay_all(txs, {"AAPL": Decimal("120"), "MSFT": Decimal("310")})

        assert states["AAPL"].quantity == Decimal("5")
        assert states["AAPL"].realized_pnl == Decimal("50")
        assert states["MSFT"].avg_cost == Decimal("300")
        assert [r.transaction for r in rows] == txs


# =============================================================================
# HOLDINGS AND LOTS TESTS
# =============================================================================


class TestHoldingsTable:
    """Tests for build_holdings_table."""

    def test_transactions_take_precedence_over_snapshot(self):
        """
        GIVEN a holding listed with 999 shares
        AND transactions that leave 6 shares
        WHEN I build the holdings table
        THEN the row reflects the reconstructed 6 shares
        """
        holdings = [Holding("AAPL", "Apple", Decimal("999"), Decimal("1"), "USD")]
        txs = [
            buy("AAPL", date(2024, 1, 1), "10", "100"),
            sell("AAPL", date(2024, 2, 1), "4", "120", "1"),
        ]

        table = build_holdings_table(holdings, {"AAPL": Decimal("130")}, txs)

        row = table.rows[0]
        assert row.from_transactions is True
        assert row.quantity == Decimal("6")
        assert row.value == Decimal("780")
        assert row.pnl == Decimal("259")
        assert_decimal_equal(row.pnl_pct, Decimal("259") / Decimal("600"), Decimal("0.0001"))

    def test_holding_without_transactions_uses_snapshot(self):
        holdings = [Holding("GGAL", "Galicia", Decimal("100"), Decimal("2"), "ARS")]

        table = build_holdings_table(holdings, {"GGAL": Decimal("3")}, [])

        row = table.rows[0]
        assert row.from_transactions is False
        assert row.realized_pnl == Decimal("0")
        assert row.unrealized_pnl == Decimal("100")
        assert table.total_value == Decimal("300")

    def test_zero_cost_base_has_no_percentage(self):
        holdings = [Holding("XYZ", "Xyz", Decimal("0"), Decimal("0"), "USD")]

        table = build_holdings_table(holdings, {}, [])

        assert table.rows[0].pnl_pct is None
        assert table.rows[0].current_price is None

    def test_totals_sum_rows(self):
        holdings = [
            Holding("AAPL", "Apple", Decimal("0"), Decimal("0"), "USD"),
            Holding("GGAL", "Galicia", Decimal("100"), Decimal("2"), "ARS"),
        ]
        txs = [buy("AAPL", date(2024, 1, 1), "1", "100")]

        table = build_holdings_table(holdings, {"AAPL": Decimal("110"), "GGAL": Decimal("3")}, txs)

        assert table.total_value == Decimal("410")
        assert table.total_pnl == Decimal("110")


class TestLots:
    """Tests for build_lots."""

    def test_each_buy_is_a_lot(self, fixed_today):
        """
        GIVEN two buys and a sell of AAPL, current price 130
        WHEN I build the lots view
        THEN there is one row per buy, valued at the current price
        AND totals sum the lots
        """
        txs = [
            buy("AAPL", date(2024, 6, 20), "10", "100", "5"),
            buy("AAPL", date(2024, 6, 25), "5", "120"),
            sell("AAPL", date(2024, 6, 26), "3", "125"),
        ]

        lots = build_lots("AAPL", txs, Decimal("130"), fixed_today)

        assert len(lots.rows) == 2
        first = lots.rows[0]
        assert first.invested == Decimal("1005")
        assert first.value == Decimal("1300")
        assert first.pnl == Decimal("295")
        assert first.days_held == 10
        assert lots.total_quantity == Decimal("15")
        assert lots.total_invested == Decimal("1605")
        assert lots.total_value == Decimal("1950")
        assert lots.total_pnl == Decimal("345")
        assert_decimal_equal(lots.total_pnl_pct, Decimal("345") / Decimal("1605"), Decimal("0.0001"))

    def test_no_buys_yields_empty_view(self, fixed_today):
        lots = build_lots("AAPL", [dividend("AAPL", date(2024, 1, 1), "3")], Decimal("130"), fixed_today)

        assert lots.rows == []
        assert lots.total_pnl_pct == Decimal("0")
