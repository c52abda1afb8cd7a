"""
Order lifecycle: the status vocabulary, the customer-facing delivery
timeline, and the policy deciding which status changes an admin may make.

Everything here is pure. The stored status is an open string, so any value
outside the known vocabulary is tolerated and shown as the first step.
"""
from dataclasses import dataclass, field
from enum import Enum


class OrderStatus(str, Enum):
    PENDING = "Pending"
    DISPATCHED = "Dispatched"
    DELIVERED = "Delivered"
    COMPLETED = "Completed"
    REFUND_PENDING = "Refund Pending"
    REFUNDED = "Refunded"


@dataclass(frozen=True)
class DeliveryStep:
    status: OrderStatus
    label: str
    description: str


DELIVERY_STEPS = (
    DeliveryStep(OrderStatus.PENDING, "Order Placed", "Your order has been received"),
    DeliveryStep(OrderStatus.DISPATCHED, "Preparing", "Your order is being prepared for dispatch"),
    DeliveryStep(OrderStatus.DELIVERED, "Out for Delivery", "Your order is on the way"),
    DeliveryStep(OrderStatus.COMPLETED, "Delivered", "Your order has been delivered"),
)

REFUND_STATUSES = frozenset({OrderStatus.REFUND_PENDING.value, OrderStatus.REFUNDED.value})

REFUND_SETTLEMENT_NOTICE = "Refunds are usually settled within 3-5 business days."

_STEP_INDEX = {step.status.value: index for index, step in enumerate(DELIVERY_STEPS)}


def step_index(status: str | None) -> int:
    """Position of `status` on the delivery timeline; 0 for refunds and unknown values."""
    return _STEP_INDEX.get(status or "", 0)


def is_refund(status: str | None) -> bool:
    return status in REFUND_STATUSES


@dataclass(frozen=True)
class TimelineStep:
    key: str
    label: str
    description: str
    completed: bool
    current: bool


@dataclass(frozen=True)
class TrackingView:
    status: str
    is_refund: bool
    current_step: int
    steps: list[TimelineStep] = field(default_factory=list)
    notice: str | None = None


def build_tracking(status: str | None) -> TrackingView:
    """Derive what the tracking page shows for a stored status.

    Refund orders get the refund branch and no timeline at all.
    """
    status = status or ""
    if is_refund(status):
        return TrackingView(
            status=status,
            is_refund=True,
            current_step=step_index(status),
            steps=[],
            notice=REFUND_SETTLEMENT_NOTICE,
        )

    current = step_index(status)
    steps = [
        TimelineStep(
            key=step.status.value,
            label=step.label,
            description=step.description,
            completed=index <= current,
            current=index == current,
        )
        for index, step in enumerate(DELIVERY_STEPS)
    ]
    return TrackingView(status=status, is_refund=False, current_step=current, steps=steps)


# --- TRANSITION POLICY ---

_DELIVERY_ORDER = [step.status.value for step in DELIVERY_STEPS]

STRICT_TRANSITIONS: dict[str, set[str]] = {
    current: set(_DELIVERY_ORDER[index + 1:]) | {OrderStatus.REFUND_PENDING.value}
    for index, current in enumerate(_DELIVERY_ORDER)
}
STRICT_TRANSITIONS[OrderStatus.REFUND_PENDING.value] = {OrderStatus.REFUNDED.value}
STRICT_TRANSITIONS[OrderStatus.REFUNDED.value] = set()


class TransitionPolicy(str, Enum):
    PERMISSIVE = "permissive"
    STRICT = "strict"


def is_transition_allowed(current: str, requested: str, policy: TransitionPolicy) -> bool:
    """Permissive allows every change, including backwards moves and
    unknown statuses. Strict only allows edges from STRICT_TRANSITIONS;
    re-setting the current status is always a no-op and allowed.
    """
    if policy is TransitionPolicy.PERMISSIVE or current == requested:
        return True
    return requested in STRICT_TRANSITIONS.get(current, set())
