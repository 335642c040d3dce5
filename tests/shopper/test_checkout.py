"""Tests for pricing and the per-vendor checkout decomposition."""

import asyncio
from decimal import Decimal

import pytest

from shopper.models.cart import CartLine
from shopper.services.checkout import (
    CheckoutDecomposer,
    IncompleteContact,
    IncompleteSelection,
    PartialCheckoutFailure,
    PricingRules,
    group_by_vendor,
    summarize,
)
from vault import ContactCodec
from tests.conftest import TEST_SECRET
from tests.fakes import FakeOrderLedger, product


class CountingCodec(ContactCodec):
    """Codec that records how often contact details were encrypted."""

    def __init__(self):
        super().__init__(TEST_SECRET)
        self.encryptions = 0

    def encrypt_contact(self, contact):
        self.encryptions += 1
        return super().encrypt_contact(contact)


def line(product_id, store, price="10.00", quantity=1, size=None, sizes=None):
    return CartLine(
        product=product(product_id, price=price, store_name=store, sizes=sizes),
        quantity=quantity,
        size=size,
    )


class TestSummarize:

    def test_shipping_charged_at_threshold(self):
        summary = summarize([line("p1", "A", price="50.00")], PricingRules())
        assert summary.shipping == Decimal("5.99")

    def test_free_shipping_above_threshold(self):
        summary = summarize([line("p1", "A", price="50.01")], PricingRules())
        assert summary.shipping == Decimal("0")

    def test_tax_and_total(self):
        lines = [line("p1", "A", price="10.00", quantity=2), line("p2", "B", price="20.00")]
        summary = summarize(lines, PricingRules())

        assert summary.subtotal == Decimal("40.00")
        assert summary.tax == Decimal("3.2")
        assert summary.total == Decimal("49.19")
        assert summary.item_count == 3
        assert summary.charge_amount == "49.19"

    def test_charge_amount_rounds_half_up(self):
        pricing = PricingRules(flat_shipping_fee=Decimal("0"))
        summary = summarize([line("p1", "A", price="0.0625")], pricing)
        # 0.0625 + 0.005 tax = 0.0675
        assert summary.charge_amount == "0.07"

    def test_empty_cart(self):
        summary = summarize([], PricingRules())
        assert summary.subtotal == Decimal("0")
        assert summary.item_count == 0


class TestGroupByVendor:

    def test_groups_in_first_appearance_order(self):
        lines = [line("p1", "B"), line("p2", "A"), line("p3", "B")]
        groups = group_by_vendor(lines)

        assert list(groups) == ["B", "A"]
        assert [l.product.id for l in groups["B"]] == ["p1", "p3"]


class TestValidate:

    def test_empty_cart_writes_nothing(self, contact):
        ledger = FakeOrderLedger()
        decomposer = CheckoutDecomposer(ledger, CountingCodec())

        with pytest.raises(IncompleteSelection):
            asyncio.run(decomposer.decompose([], contact))
        assert ledger.write_count == 0

    def test_unsized_line_rejected_before_any_write(self, contact):
        ledger = FakeOrderLedger()
        codec = CountingCodec()
        decomposer = CheckoutDecomposer(ledger, codec)
        lines = [
            line("p1", "A"),
            line("p2", "B", sizes=["S", "M"]),
        ]

        with pytest.raises(IncompleteSelection) as exc_info:
            asyncio.run(decomposer.decompose(lines, contact))

        assert exc_info.value.products == ["Product p2"]
        assert ledger.write_count == 0
        assert codec.encryptions == 0

    def test_missing_contact_fields(self, contact):
        ledger = FakeOrderLedger()
        decomposer = CheckoutDecomposer(ledger, CountingCodec())
        incomplete = contact.model_copy(update={"city": "", "phone": "  "})

        with pytest.raises(IncompleteContact) as exc_info:
            asyncio.run(decomposer.decompose([line("p1", "A")], incomplete))

        assert set(exc_info.value.missing_fields) == {"city", "phone"}
        assert ledger.write_count == 0


class TestDecompose:

    def test_one_order_per_vendor(self, contact):
        ledger = FakeOrderLedger()
        decomposer = CheckoutDecomposer(ledger, CountingCodec())
        lines = [
            line("p1", "Store A", price="10.00"),
            line("p2", "Store B", price="20.00"),
        ]

        orders = asyncio.run(decomposer.decompose(lines, contact))

        assert [(o.vendor_name, o.total) for o in orders] == [
            ("Store A", Decimal("10.00")),
            ("Store B", Decimal("20.00")),
        ]
        assert [[l.product_id for l in o.lines] for o in orders] == [["p1"], ["p2"]]
        assert all(o.status.value == "pending" for o in orders)
        assert all(o.customer_display_name == "Ada Lovelace" for o in orders)

    def test_order_totals_sum_to_subtotal(self, contact):
        ledger = FakeOrderLedger()
        decomposer = CheckoutDecomposer(ledger, CountingCodec())
        lines = [
            line("p1", "A", price="3.33", quantity=3),
            line("p2", "B", price="12.00"),
            line("p3", "A", price="0.50", quantity=2, size="M", sizes=["M"]),
        ]

        orders = asyncio.run(decomposer.decompose(lines, contact))

        assert sum(o.total for o in orders) == summarize(lines, PricingRules()).subtotal
        assert len(ledger.lines) == 3
        assert {(l["product_id"], l["size"]) for l in ledger.lines} == {
            ("p1", None), ("p2", None), ("p3", "M"),
        }

    def test_contact_encrypted_once_and_shared(self, contact):
        ledger = FakeOrderLedger()
        codec = CountingCodec()
        decomposer = CheckoutDecomposer(ledger, codec)
        lines = [line("p1", "A"), line("p2", "B"), line("p3", "C")]

        asyncio.run(decomposer.decompose(lines, contact))

        assert codec.encryptions == 1
        ciphertexts = {o["encrypted_contact"] for o in ledger.orders}
        assert len(ciphertexts) == 1
        assert codec.decrypt_contact(ciphertexts.pop()) == contact

    def test_prices_come_from_cart_snapshot(self, contact):
        ledger = FakeOrderLedger()
        decomposer = CheckoutDecomposer(ledger, CountingCodec())

        asyncio.run(decomposer.decompose([line("p1", "A", price="7.25", quantity=2)], contact))

        assert ledger.lines[0]["unit_price"] == Decimal("7.25")
        assert ledger.orders[0]["total"] == Decimal("14.50")

    def test_cart_is_left_untouched(self, contact):
        lines = [line("p1", "A")]
        snapshot = list(lines)
        decomposer = CheckoutDecomposer(FakeOrderLedger(), CountingCodec())

        asyncio.run(decomposer.decompose(lines, contact))

        assert lines == snapshot


class TestPartialFailure:

    def test_created_orders_survive_vendor_failure(self, contact):
        ledger = FakeOrderLedger()
        ledger.failing_vendors = {"B"}
        decomposer = CheckoutDecomposer(ledger, CountingCodec())
        lines = [line("p1", "A"), line("p2", "B"), line("p3", "C")]

        with pytest.raises(PartialCheckoutFailure) as exc_info:
            asyncio.run(decomposer.decompose(lines, contact))

        failure = exc_info.value
        assert set(failure.failures) == {"B"}
        assert failure.vendor_count == 3
        assert sorted(o.vendor_name for o in failure.created) == ["A", "C"]
        assert sorted(o["vendor_name"] for o in ledger.orders) == ["A", "C"]

    def test_failed_line_leaves_partial_order(self, contact):
        ledger = FakeOrderLedger()
        ledger.failing_products = {"p2"}
        decomposer = CheckoutDecomposer(ledger, CountingCodec())
        lines = [line("p1", "A"), line("p2", "A")]

        with pytest.raises(PartialCheckoutFailure) as exc_info:
            asyncio.run(decomposer.decompose(lines, contact))

        created = exc_info.value.created
        assert len(created) == 1
        assert [l.product_id for l in created[0].lines] == ["p1"]
        assert created[0].total == Decimal("20.00")

    def test_user_message_is_generic(self, contact):
        ledger = FakeOrderLedger()
        ledger.failing_vendors = {"A"}
        decomposer = CheckoutDecomposer(ledger, CountingCodec())

        with pytest.raises(PartialCheckoutFailure) as exc_info:
            asyncio.run(decomposer.decompose([line("p1", "A")], contact))

        assert exc_info.value.user_message == "Failed to create order. Please try again."
        assert exc_info.value.created == []
