"""
Beam cutting core: First-Fit Decreasing packing of required lengths into stock beams.

Both operations are pure functions of their inputs. Packing never raises for an
impossible request; it returns a CapacityExceeded or PlacementFailed value instead.
"""
import logging
import time
from typing import List, Literal, Sequence, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, computed_field

logger = logging.getLogger(__name__)

# ---------- DEFAULTS ----------
DEFAULT_STOCK_LENGTH = 2700  # mm
DEFAULT_STOCK_QUANTITY = 8
# ------------------------------


def percent(part: int, whole: int) -> int:
    """Whole-number percentage of part in whole, halves rounded up (2.5 -> 3)."""
    return (200 * part + whole) // (2 * whole)


class RequirementGroup(BaseModel):
    length: int = Field(..., gt=0, description="Length of the required beam in mm")
    quantity: int = Field(..., gt=0, description="Number of beams of this length")


class StockGroup(BaseModel):
    length: int = Field(..., gt=0, description="Length of the stock beam in mm")
    quantity: int = Field(..., gt=0, description="Number of stock beams of this length")


class Segment(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["cut", "waste"]
    length: int
    width_percent: float


class Bin(BaseModel):
    """One stock beam in a finished plan."""
    model_config = ConfigDict(frozen=True)

    index: int
    group_index: int
    capacity: int
    remaining: int
    cuts: Tuple[int, ...]

    @property
    def used(self) -> int:
        return self.capacity - self.remaining

    @property
    def used_percent(self) -> int:
        return percent(self.used, self.capacity)

    def segments(self) -> List[Segment]:
        """Proportional bar segments: each cut in order, then the waste if any."""
        parts = [
            Segment(kind="cut", length=cut, width_percent=round(cut / self.capacity * 100, 2))
            for cut in self.cuts
        ]
        if self.remaining > 0:
            parts.append(Segment(
                kind="waste",
                length=self.remaining,
                width_percent=round(self.remaining / self.capacity * 100, 2),
            ))
        return parts


class CuttingPlan(BaseModel):
    model_config = ConfigDict(frozen=True)

    bins: Tuple[Bin, ...]

    is_success: Literal[True] = True

    @computed_field
    @property
    def total_capacity(self) -> int:
        return sum(b.capacity for b in self.bins)

    @computed_field
    @property
    def total_used(self) -> int:
        return sum(b.used for b in self.bins)

    @computed_field
    @property
    def total_waste(self) -> int:
        return sum(b.remaining for b in self.bins)

    @computed_field
    @property
    def efficiency_percent(self) -> int:
        if self.total_capacity == 0:
            return 0
        return percent(self.total_used, self.total_capacity)

    @property
    def bins_used(self) -> int:
        return sum(1 for b in self.bins if b.cuts)


class CapacityExceeded(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["capacity_exceeded"] = "capacity_exceeded"
    total_demand: int
    total_capacity: int

    is_success: Literal[False] = False

    @computed_field
    @property
    def message(self) -> str:
        return (f"Impossible: Total length needed ({self.total_demand}mm) "
                f"exceeds capacity ({self.total_capacity}mm)")


class PlacementFailed(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["placement_failed"] = "placement_failed"
    unplaceable: Tuple[int, ...]

    is_success: Literal[False] = False

    @computed_field
    @property
    def message(self) -> str:
        lengths = ", ".join(str(length) for length in self.unplaceable)
        return f"Impossible: Cannot fit beams of lengths: {lengths}mm into available space"


PackingFailure = Union[CapacityExceeded, PlacementFailed]
PackingResult = Union[CuttingPlan, PackingFailure]


def default_stock() -> List[StockGroup]:
    return [StockGroup(length=DEFAULT_STOCK_LENGTH, quantity=DEFAULT_STOCK_QUANTITY)]


def expand_demand(groups: Sequence[RequirementGroup]) -> List[int]:
    """
    Flatten requirement groups into individual piece lengths, longest first.

    Args:
        groups: Requirement groups, each already validated as positive

    Returns:
        One entry per piece, sorted in non-increasing order
    """
    pieces = []
    for group in groups:
        pieces.extend([group.length] * group.quantity)
    pieces.sort(reverse=True)
    return pieces


def pack(demand: Sequence[int], stock_groups: Sequence[StockGroup]) -> PackingResult:
    """
    Assign every piece of demand to a stock beam using First-Fit.

    Demand is processed in the order given; pass the output of expand_demand
    to get First-Fit Decreasing. Bins are scanned in stock expansion order
    (groups in input order, then per quantity) and the first bin with enough
    remaining length takes the piece.

    Args:
        demand: Individual piece lengths in mm
        stock_groups: Available stock, expanded to one bin per unit

    Returns:
        CuttingPlan when every piece was placed, CapacityExceeded when total
        demand is larger than total stock, PlacementFailed listing every piece
        that found no bin otherwise
    """
    start_time = time.time()

    # [group_index, capacity, remaining, cuts] per stock unit
    bins = []
    for group_index, group in enumerate(stock_groups):
        for _ in range(group.quantity):
            bins.append([group_index, group.length, group.length, []])

    total_demand = sum(demand)
    total_capacity = sum(b[1] for b in bins)
    logger.info(f"📦 Packing {len(demand)} pieces ({total_demand}mm) "
                f"into {len(bins)} beams ({total_capacity}mm)")

    if total_demand > total_capacity:
        logger.info(f"❌ Demand exceeds capacity by {total_demand - total_capacity}mm")
        return CapacityExceeded(total_demand=total_demand, total_capacity=total_capacity)

    unplaceable = []
    for length in demand:
        for position, b in enumerate(bins):
            if b[2] >= length:
                b[3].append(length)
                b[2] -= length
                logger.debug(f"  - {length}mm -> beam {position + 1} ({b[2]}mm left)")
                break
        else:
            logger.debug(f"  - {length}mm fits no beam")
            unplaceable.append(length)

    if unplaceable:
        logger.info(f"❌ {len(unplaceable)} pieces could not be placed: {unplaceable}")
        return PlacementFailed(unplaceable=tuple(unplaceable))

    plan = CuttingPlan(bins=tuple(
        Bin(index=position + 1, group_index=group_index, capacity=capacity,
            remaining=remaining, cuts=tuple(cuts))
        for position, (group_index, capacity, remaining, cuts) in enumerate(bins)
    ))

    elapsed_time = time.time() - start_time
    logger.info(f"✅ Plan uses {plan.bins_used} of {len(plan.bins)} beams, "
                f"waste {plan.total_waste}mm, efficiency {plan.efficiency_percent}% "
                f"({elapsed_time * 1000:.1f}ms)")
    return plan


def plan_cuts(required: Sequence[RequirementGroup], stock: Sequence[StockGroup]) -> PackingResult:
    return pack(expand_demand(required), stock)


if __name__ == "__main__":
    # ---------- INPUT ----------
    required = [
        RequirementGroup(length=500, quantity=2),
        RequirementGroup(length=800, quantity=3),
    ]
    stock = default_stock()
    # ---------------------------

    result = plan_cuts(required, stock)

    # ---------- OUTPUT ----------
    if not result.is_success:
        print(result.message)
    else:
        for b in result.bins:
            print(f"Beam {b.index}: cuts={b.cuts} used={b.used} ({b.used_percent}%) waste={b.remaining}")
        print(f"Total used: {result.total_used}mm")
        print(f"Total waste: {result.total_waste}mm")
        print(f"Efficiency: {result.efficiency_percent}%")
