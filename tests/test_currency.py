"""Unit tests for currency parsing, arithmetic and formatting."""

import pytest
from pydantic import ValidationError

from tradepost import Actor, CurrencyAmount, Item, currency


class TestFromHoldings:
    def test_sums_all_coins(self):
        amount = currency.from_holdings({"pp": 1, "gp": 2, "ep": 1, "sp": 3, "cp": 4})
        assert amount.copper == 1000 + 200 + 50 + 30 + 4

    def test_empty_is_zero(self):
        assert currency.from_holdings({}).copper == 0
        assert currency.from_holdings(None).copper == 0

    def test_ignores_unknown_keys(self):
        assert currency.from_holdings({"gp": 1, "gems": 9}).copper == 100

    def test_negative_count_rejected(self):
        with pytest.raises(ValueError):
            currency.from_holdings({"gp": -1})

    def test_from_actor(self):
        actor = Actor(id="pc-01", name="Vex", currency={"gp": 50})
        assert currency.from_actor(actor).copper == 5000


class TestParsePrice:
    def test_bare_number_is_gold(self):
        assert currency.parse_price(10).copper == 1000

    def test_fractional_gold(self):
        assert currency.parse_price(0.5).copper == 50

    def test_single_denomination(self):
        assert currency.parse_price("5 sp").copper == 50

    def test_no_space_before_coin(self):
        assert currency.parse_price("2.5gp").copper == 250

    def test_numeric_string_is_gold(self):
        assert currency.parse_price("12").copper == 1200

    def test_multiple_parts(self):
        assert currency.parse_price("1 gp 5 sp").copper == 150
        assert currency.parse_price("1 gp, 5 sp").copper == 150

    def test_case_insensitive(self):
        assert currency.parse_price("3 GP").copper == 300

    def test_empty_is_free(self):
        assert currency.parse_price(None).copper == 0
        assert currency.parse_price("  ").copper == 0

    def test_negative_rejected(self):
        with pytest.raises(ValueError):
            currency.parse_price(-1)

    @pytest.mark.parametrize("text", ["abc", "12 xp", "gp 5", "5 gp and change"])
    def test_garbage_rejected(self, text: str):
        with pytest.raises(ValueError):
            currency.parse_price(text)

    def test_from_item(self):
        item = Item(id="i-1", name="Rope", owner_id="m-1", price="1 gp")
        assert currency.from_item(item).copper == 100


class TestArithmetic:
    def test_multiply(self):
        assert currency.multiply(3, CurrencyAmount(copper=1000)).copper == 3000

    def test_multiply_by_zero(self):
        assert currency.multiply(0, CurrencyAmount(copper=1000)).copper == 0

    def test_multiply_negative_rejected(self):
        with pytest.raises(ValueError):
            currency.multiply(-1, CurrencyAmount(copper=10))

    def test_is_at_least_equal(self):
        assert currency.is_at_least(CurrencyAmount(copper=30), CurrencyAmount(copper=30))

    def test_is_at_least_less(self):
        assert not currency.is_at_least(CurrencyAmount(copper=29), CurrencyAmount(copper=30))

    def test_ordering_operators(self):
        low, high = CurrencyAmount(copper=1), CurrencyAmount(copper=2)
        assert high >= low
        assert high > low
        assert low <= high
        assert low < high

    def test_amount_cannot_be_negative(self):
        with pytest.raises(ValidationError):
            CurrencyAmount(copper=-5)

    def test_amount_is_frozen(self):
        amount = CurrencyAmount(copper=5)
        with pytest.raises(ValidationError):
            amount.copper = 10  # type: ignore[misc]


class TestFormatting:
    def test_gold_only(self):
        assert currency.to_string(CurrencyAmount(copper=3000)) == "30 gp"

    def test_mixed(self):
        assert currency.to_string(CurrencyAmount(copper=3055)) == "30 gp 5 sp 5 cp"

    def test_skips_zero_parts(self):
        assert currency.to_string(CurrencyAmount(copper=3005)) == "30 gp 5 cp"

    def test_zero(self):
        assert currency.to_string(CurrencyAmount()) == "0 gp"

    def test_str(self):
        assert str(CurrencyAmount(copper=50)) == "5 sp"

    def test_to_holdings(self):
        assert currency.to_holdings(CurrencyAmount(copper=1234)) == {"gp": 12, "sp": 3, "cp": 4}
