"""
Checkout Decomposer

Splits one cart into one independent order per vendor. There is no
transaction spanning vendors: orders that were written before another
vendor failed stay in the ledger, and the failure reports them.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from vault import ContactBundle, ContactCodec

from ..models.cart import CartLine
from ..models.order import OrderLine, OrderStatus, VendorOrder
from .ledger import OrderLedger

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")


class CheckoutError(Exception):
    """Base exception for checkout failures"""

    user_message = "Failed to create order. Please try again."


class IncompleteSelection(CheckoutError):
    """The cart is empty or a line is missing its size"""

    user_message = "Please choose a size for every item in your cart."

    def __init__(self, message: str, products: Optional[list[str]] = None):
        super().__init__(message)
        self.products = products or []


class IncompleteContact(CheckoutError):
    """Some shipping or contact details are blank"""

    user_message = "Please fill in all shipping details."

    def __init__(self, missing_fields: list[str]):
        super().__init__(f"Missing contact fields: {', '.join(missing_fields)}")
        self.missing_fields = missing_fields


class PartialCheckoutFailure(CheckoutError):
    """
    At least one vendor order could not be written.

    `created` holds every order that reached the ledger, including an order
    whose lines were only partly written; `failures` maps vendor names to
    the error that stopped them.
    """

    def __init__(
        self,
        created: list[VendorOrder],
        failures: dict[str, Exception],
        vendor_count: int,
    ):
        super().__init__(
            f"{len(failures)} of {vendor_count} vendor orders failed: "
            f"{', '.join(failures)}"
        )
        self.created = created
        self.failures = failures
        self.vendor_count = vendor_count


@dataclass
class PricingRules:
    """Flat shipping and tax applied to the whole cart"""
    tax_rate: Decimal = Decimal("0.08")
    flat_shipping_fee: Decimal = Decimal("5.99")
    free_shipping_threshold: Decimal = Decimal("50")

    @classmethod
    def from_settings(cls, settings) -> "PricingRules":
        return cls(
            tax_rate=settings.tax_rate,
            flat_shipping_fee=settings.flat_shipping_fee,
            free_shipping_threshold=settings.free_shipping_threshold,
        )


@dataclass
class CheckoutSummary:
    """Amounts shown to the shopper and charged by the payment provider"""
    subtotal: Decimal
    shipping: Decimal
    tax: Decimal
    item_count: int

    @property
    def total(self) -> Decimal:
        return self.subtotal + self.shipping + self.tax

    @property
    def charge_amount(self) -> str:
        """Total rounded to cents, as sent to the payment provider"""
        return str(self.total.quantize(CENTS, rounding=ROUND_HALF_UP))


def summarize(lines: list[CartLine], pricing: PricingRules) -> CheckoutSummary:
    """Price a cart: free shipping above the threshold, flat tax on the subtotal"""
    subtotal = sum((line.line_total for line in lines), Decimal("0"))
    shipping = Decimal("0") if subtotal > pricing.free_shipping_threshold else pricing.flat_shipping_fee
    return CheckoutSummary(
        subtotal=subtotal,
        shipping=shipping,
        tax=subtotal * pricing.tax_rate,
        item_count=sum(line.quantity for line in lines),
    )


def group_by_vendor(lines: list[CartLine]) -> dict[str, list[CartLine]]:
    """Partition lines by store, in order of first appearance"""
    groups: dict[str, list[CartLine]] = {}
    for line in lines:
        groups.setdefault(line.product.store_name, []).append(line)
    return groups


@dataclass
class _VendorResult:
    vendor_name: str
    order: Optional[VendorOrder] = None
    error: Optional[Exception] = None
    lines: list[OrderLine] = field(default_factory=list)


class CheckoutDecomposer:
    """
    Writes one pending order per vendor for a cart.

    Usage:
        decomposer = CheckoutDecomposer(ledger, codec)
        orders = await decomposer.decompose(engine.lines, contact)
    """

    def __init__(self, ledger: OrderLedger, codec: ContactCodec):
        self.ledger = ledger
        self.codec = codec

    def validate(self, lines: list[CartLine], contact: ContactBundle) -> None:
        """
        Check a checkout can proceed, before anything is written.

        Raises:
            IncompleteSelection: cart is empty or a sized product has no size
            IncompleteContact: a contact field is blank
        """
        if not lines:
            raise IncompleteSelection("Cart is empty")

        unsized = [line.product.name for line in lines if line.product.sizes and not line.size]
        if unsized:
            raise IncompleteSelection(
                f"No size selected for: {', '.join(unsized)}",
                products=unsized,
            )

        missing = contact.missing_fields()
        if missing:
            raise IncompleteContact(missing)

    async def decompose(self, lines: list[CartLine], contact: ContactBundle) -> list[VendorOrder]:
        """
        Create the vendor orders for a cart.

        The cart itself is left untouched.

        Returns:
            One VendorOrder per distinct store, in order of first appearance

        Raises:
            IncompleteSelection, IncompleteContact: nothing was written
            PartialCheckoutFailure: some vendor orders were not written
        """
        self.validate(lines, contact)

        lines = list(lines)
        encrypted_contact = self.codec.encrypt_contact(contact)
        customer = contact.display_name
        groups = group_by_vendor(lines)

        results = await asyncio.gather(
            *(
                self._create_vendor_order(vendor, vendor_lines, customer, encrypted_contact)
                for vendor, vendor_lines in groups.items()
            )
        )

        created = [r.order for r in results if r.order is not None]
        failures = {r.vendor_name: r.error for r in results if r.error is not None}
        if failures:
            for vendor, error in failures.items():
                logger.error(f"Order for {vendor} failed: {error}")
            raise PartialCheckoutFailure(created, failures, len(results))

        logger.info(f"Checkout created {len(created)} vendor orders")
        return created

    async def _create_vendor_order(
        self,
        vendor_name: str,
        lines: list[CartLine],
        customer: str,
        encrypted_contact: str,
    ) -> _VendorResult:
        result = _VendorResult(vendor_name=vendor_name)
        total = sum((line.line_total for line in lines), Decimal("0"))

        try:
            order_id = await self.ledger.insert_order(
                vendor_name=vendor_name,
                customer=customer,
                encrypted_contact=encrypted_contact,
                total=total,
                status=OrderStatus.PENDING,
            )
        except Exception as e:
            result.error = e
            return result

        order_lines = [
            OrderLine(
                order_id=order_id,
                product_id=line.product.id,
                quantity=line.quantity,
                unit_price=line.product.price,
                size=line.size,
            )
            for line in lines
        ]

        outcomes = await asyncio.gather(
            *(
                self.ledger.insert_order_line(
                    order_id=ol.order_id,
                    product_id=ol.product_id,
                    quantity=ol.quantity,
                    unit_price=ol.unit_price,
                    size=ol.size,
                )
                for ol in order_lines
            ),
            return_exceptions=True,
        )

        result.order = VendorOrder(
            id=order_id,
            vendor_name=vendor_name,
            customer_display_name=customer,
            encrypted_contact=encrypted_contact,
            total=total,
            status=OrderStatus.PENDING,
            lines=[
                ol for ol, outcome in zip(order_lines, outcomes)
                if not isinstance(outcome, BaseException)
            ],
        )
        errors = [outcome for outcome in outcomes if isinstance(outcome, BaseException)]
        if errors:
            result.error = errors[0]
        return result
