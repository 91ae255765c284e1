import logging
from collections import namedtuple
from decimal import ROUND_HALF_UP, Decimal

from sqlalchemy import func, or_

from agentbook.errors import DuplicateError, ValidationError
from agentbook.extensions import db
from agentbook.models import Commission
from agentbook.services.platform_service import PlatformService
from agentbook.services.unit_of_work import unit_of_work

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")
HUNDRED = Decimal("100")

CommissionSplit = namedtuple("CommissionSplit", ["owner_commission", "booking_commission", "platform_fee"])


def _round(amount):
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


class CommissionService:
    @staticmethod
    def compute_commission(booking, commission_rate_percent):
        """Split a booking total between owner agent, booking agent and platform.

        The platform keeps ``commission_rate_percent`` of the total. The rest
        goes entirely to the owner on a self-booking, otherwise half to each
        agent. Every figure is rounded half-up to cents, then the largest
        component absorbs any rounding difference so the three parts add up
        to the total exactly.
        """
        total = _round(Decimal(str(booking.total_amount)))
        rate = Decimal(str(commission_rate_percent))
        if rate < 0 or rate > HUNDRED:
            raise ValidationError("Commission rate must be between 0 and 100.")

        platform_fee = _round(total * rate / HUNDRED)
        remainder = total - platform_fee
        if booking.owner_agent_id == booking.booking_agent_id:
            owner_commission, booking_commission = remainder, Decimal("0.00")
        else:
            owner_commission = _round(remainder / 2)
            booking_commission = _round(remainder / 2)

        parts = [owner_commission, booking_commission, platform_fee]
        drift = total - sum(parts)
        if drift:
            largest = max(range(len(parts)), key=lambda idx: (parts[idx], -idx))
            parts[largest] += drift
        return CommissionSplit(*[_round(part) for part in parts])

    @staticmethod
    def current_rate():
        default = PlatformService.default_commission_pct()
        return PlatformService.get_decimal("commission_pct", default)

    @staticmethod
    def add_commission(booking, commission_rate_percent=None):
        """Create the booking's commission in the caller's transaction."""
        if Commission.query.filter_by(booking_id=booking.id).first():
            raise DuplicateError(f"Commission already recorded for booking #{booking.id}.")

        if commission_rate_percent is None:
            rate = CommissionService.current_rate()
        else:
            rate = Decimal(str(commission_rate_percent))
        split = CommissionService.compute_commission(booking, rate)
        commission = Commission(
            booking_id=booking.id,
            owner_agent_id=booking.owner_agent_id,
            booking_agent_id=booking.booking_agent_id,
            total_amount=_round(Decimal(str(booking.total_amount))),
            owner_commission=split.owner_commission,
            booking_commission=split.booking_commission,
            platform_fee=split.platform_fee,
            commission_rate=rate,
            status="pending",
        )
        db.session.add(commission)
        db.session.flush()
        logger.info(
            "Commission %s for booking %s: owner=%s booking=%s platform=%s (rate %s%%)",
            commission.id,
            booking.id,
            split.owner_commission,
            split.booking_commission,
            split.platform_fee,
            rate,
        )
        return commission

    @staticmethod
    def create_commission(booking, commission_rate_percent=None):
        with unit_of_work():
            commission = CommissionService.add_commission(booking, commission_rate_percent)
        return commission

    @staticmethod
    def get_for_booking(booking_id):
        return Commission.query.filter_by(booking_id=booking_id).first()

    @staticmethod
    def list_for_agent(agent_id, status=None):
        query = Commission.query.filter(
            or_(Commission.owner_agent_id == agent_id, Commission.booking_agent_id == agent_id)
        )
        if status:
            query = query.filter(Commission.status == status)
        return query.order_by(Commission.created_at.desc()).all()

    @staticmethod
    def list_all(status=None):
        query = Commission.query
        if status:
            query = query.filter(Commission.status == status)
        return query.order_by(Commission.created_at.desc()).all()

    @staticmethod
    def agent_summary(agent_id):
        """Earnings of one agent, split by role and payment status."""
        summary = {
            "owner_commission": Decimal("0.00"),
            "booking_commission": Decimal("0.00"),
            "paid": Decimal("0.00"),
            "pending": Decimal("0.00"),
            "count": 0,
        }
        rows = (
            db.session.query(
                Commission.status,
                func.coalesce(func.sum(Commission.owner_commission), 0),
                func.count(Commission.id),
            )
            .filter(Commission.owner_agent_id == agent_id)
            .group_by(Commission.status)
            .all()
        )
        for status, amount, count in rows:
            amount = _round(Decimal(str(amount)))
            summary["owner_commission"] += amount
            summary[status if status in ("paid", "pending") else "pending"] += amount
            summary["count"] += count

        rows = (
            db.session.query(
                Commission.status,
                func.coalesce(func.sum(Commission.booking_commission), 0),
                func.count(Commission.id),
            )
            .filter(Commission.booking_agent_id == agent_id)
            .filter(Commission.owner_agent_id != agent_id)
            .group_by(Commission.status)
            .all()
        )
        for status, amount, count in rows:
            amount = _round(Decimal(str(amount)))
            summary["booking_commission"] += amount
            summary[status if status in ("paid", "pending") else "pending"] += amount
            summary["count"] += count

        summary["total"] = summary["owner_commission"] + summary["booking_commission"]
        return summary
