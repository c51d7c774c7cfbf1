"""
Stock-linked bill lines

A line drawn from a catalog product derives its weights from the stock
record instead of manual entry: average gross per piece times the
requested pieces, minus a per-piece deduction. Requests are capped at
the pieces in stock.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal

from core.billing.models import LineItem
from core.constants import ItemDefaults
from core.utils.numeric import ZERO, NumericInput, percent_of, to_decimal, to_int

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StockProduct:
    """Catalog product as held in stock

    Attributes:
        product_id: catalog id
        name: product name (becomes the line description)
        pieces: pieces in stock
        gross_weight: gross weight of all pieces in stock (g)
        net_weight: net weight of all pieces in stock (g)
        per_piece_weight: stone / attachment deduction per piece (g)
        touch: purity percentage
    """

    product_id: str | None = None
    name: str = ""
    pieces: NumericInput = 0
    gross_weight: NumericInput = 0
    net_weight: NumericInput = 0
    per_piece_weight: NumericInput = 0
    touch: NumericInput = 0

    @classmethod
    def from_api(cls, data: dict) -> "StockProduct":
        """Build from a backend product record (camelCase keys)"""
        product_id = data.get("id")
        return cls(
            product_id=str(product_id) if product_id is not None else None,
            name=data.get("name") or "",
            pieces=data.get("pieces"),
            gross_weight=data.get("grossWeight"),
            net_weight=data.get("netWeight"),
            per_piece_weight=data.get("perPieceWeight"),
            touch=data.get("touch"),
        )


@dataclass(frozen=True)
class StockAllocation:
    """Result of drawing pieces from a stock product

    Attributes:
        item: bill line with derived weights
        requested_pieces: pieces asked for
        allocated_pieces: pieces actually placed on the line
        warning: set when the request was clamped
    """

    item: LineItem
    requested_pieces: Decimal
    allocated_pieces: Decimal
    warning: str | None = None

    @property
    def clamped(self) -> bool:
        return self.warning is not None


def allocate_stock_item(
    product: StockProduct,
    requested_pieces: NumericInput,
    labor_rate_per_kg: NumericInput = ItemDefaults.WHOLESALE_LABOR_RATE_PER_KG,
    stamp: str = ItemDefaults.STAMP,
) -> StockAllocation:
    """Derive a bill line for `requested_pieces` of a stock product

    gross = product gross / stock pieces * pieces
    stone = per-piece deduction * pieces
    net   = gross - stone

    Touch comes from the product and wastage resets to 0. A request
    above the stock count is capped (warning, never an error), so an
    out-of-stock product allocates 0 pieces; a negative request becomes
    0. The requested count keeps its fraction for the weight math. With
    zero pieces in stock the product's own gross/net totals are kept as
    the line weights.

    Args:
        product: stock record
        requested_pieces: pieces entered on the line
        labor_rate_per_kg: labor rate for the line
        stamp: hallmark stamp text

    Returns:
        StockAllocation
    """
    requested = to_decimal(requested_pieces)
    stock_pieces = to_int(product.pieces)
    pieces = requested
    warning = None

    if requested > stock_pieces:
        pieces = Decimal(max(stock_pieces, 0))
        warning = f"Stock only has {stock_pieces} pieces"
    elif requested < 0:
        pieces = ZERO
        warning = f"Invalid piece count {requested}, using 0"

    if warning:
        logger.warning(
            f"Stock allocation clamped: {product.name or product.product_id} "
            f"requested={requested}, allocated={pieces}"
        )

    if stock_pieces > 0:
        average_gross = to_decimal(product.gross_weight) / Decimal(stock_pieces)
        gross = average_gross * pieces
        stone = to_decimal(product.per_piece_weight) * pieces
        net = gross - stone
    else:
        gross = to_decimal(product.gross_weight)
        stone = ZERO
        net = to_decimal(product.net_weight)

    item = LineItem(
        pieces=pieces,
        gross_weight=gross,
        stone_weight=stone,
        net_weight=net,
        touch=to_decimal(product.touch),
        wastage=ZERO,
        labor_rate_per_kg=labor_rate_per_kg,
        stamp=stamp,
        description=product.name,
        product_id=product.product_id,
    )

    return StockAllocation(
        item=item,
        requested_pieces=requested,
        allocated_pieces=pieces,
        warning=warning,
    )


@dataclass(frozen=True)
class ProductWeights:
    """Derived weights of a product entry"""

    net_weight: Decimal
    pure_weight: Decimal


def compute_product_weights(
    gross_weight: NumericInput,
    pieces: NumericInput,
    per_piece_weight: NumericInput,
    touch: NumericInput,
) -> ProductWeights:
    """Net and pure weight for a product being added to stock

    net  = max(0, gross - pieces * per-piece deduction)
    pure = net * touch / 100
    """
    gross = to_decimal(gross_weight)
    deduction = to_decimal(pieces) * to_decimal(per_piece_weight)
    net = max(ZERO, gross - deduction)
    return ProductWeights(net_weight=net, pure_weight=percent_of(net, to_decimal(touch)))


@dataclass(frozen=True)
class StockSummary:
    products: int
    pieces: int
    net_weight: Decimal
    fine_weight: Decimal


def summarize_stock(products: Iterable[StockProduct]) -> StockSummary:
    """Stock totals: pieces, net weight and fine weight (net * touch / 100)"""
    count = 0
    pieces = 0
    net = ZERO
    fine = ZERO
    for product in products:
        product_net = to_decimal(product.net_weight)
        count += 1
        pieces += to_int(product.pieces)
        net += product_net
        fine += percent_of(product_net, to_decimal(product.touch))
    return StockSummary(products=count, pieces=pieces, net_weight=net, fine_weight=fine)
