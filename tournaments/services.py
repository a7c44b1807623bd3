import logging
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from django.conf import settings
from django.db import IntegrityError, transaction
from django.utils import timezone
from rest_framework.exceptions import PermissionDenied

from notifications.services import notify
from platform_settings.services import CommissionSettings, get_commission_settings
from users.models import User
from wallet.exceptions import InsufficientFunds
from wallet.models import Transaction, Wallet
from wallet.services import WalletService

from .exceptions import (
    AlreadyJoined,
    InvalidStateTransition,
    InvalidWinner,
    TournamentFull,
    TournamentNotOpen,
)
from .models import Participant, Tournament

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")
HUNDRED = Decimal("100")


@dataclass(frozen=True)
class EntryFeeSplit:
    organizer: Decimal
    platform: Decimal
    prize: Decimal


def _share(amount, percent):
    return (Decimal(amount) * Decimal(percent) / HUNDRED).quantize(CENT, rounding=ROUND_HALF_UP)


def compute_entry_fee_split(entry_fee, commission: CommissionSettings) -> EntryFeeSplit:
    """
    Splits a fee (or a total of fees) into organizer, platform and prize
    shares. The prize pool takes the remainder after the two rounded
    commissions, so the shares always add up to the fee.
    """
    entry_fee = Decimal(entry_fee).quantize(CENT, rounding=ROUND_HALF_UP)
    organizer = _share(entry_fee, commission.organizer_percent)
    platform = min(_share(entry_fee, commission.platform_percent), entry_fee - organizer)
    return EntryFeeSplit(
        organizer=organizer,
        platform=platform,
        prize=entry_fee - organizer - platform,
    )


def ensure_can_manage(tournament: Tournament, user: User):
    if not (user.is_staff or tournament.organizer_id == user.pk):
        raise PermissionDenied("Only the organizer or an admin can manage this tournament.")


def _lock(tournament):
    return Tournament.objects.select_for_update().get(pk=tournament.pk)


def _validate_join(tournament: Tournament, user: User):
    if tournament.status != Tournament.Status.UPCOMING:
        raise TournamentNotOpen("Registration for this tournament is closed.")
    if Participant.objects.filter(tournament=tournament, user=user).exists():
        raise AlreadyJoined("You are already registered for this tournament.")
    if tournament.participant_entries.count() >= tournament.max_participants:
        raise TournamentFull("This tournament is full.")
    if not tournament.is_free:
        balance = Wallet.objects.filter(user=user).values_list("balance", flat=True).first()
        if balance is None or balance < tournament.entry_fee:
            raise InsufficientFunds(
                f"Insufficient balance. You need ₹{tournament.entry_fee} to join."
            )


def join_tournament(tournament: Tournament, user: User, commission: CommissionSettings = None):
    """
    Registers ``user`` and settles the entry fee.

    Every check runs before any write. The fee debit, the participant row and
    the tournament's pool/earnings update then happen in one database
    transaction with the tournament and wallet rows locked.
    """
    if commission is None:
        commission = get_commission_settings()

    _validate_join(tournament, user)
    split = compute_entry_fee_split(tournament.entry_fee, commission)

    try:
        with transaction.atomic():
            locked = _lock(tournament)
            _validate_join(locked, user)

            if not locked.is_free:
                WalletService.debit(
                    user,
                    locked.entry_fee,
                    Transaction.TransactionType.ENTRY_FEE,
                    description=f"Entry fee for {locked.title}",
                    tournament=locked,
                )

            participant = Participant.objects.create(user=user, tournament=locked)

            locked.current_prize_pool += split.prize
            locked.organizer_earnings += split.organizer
            locked.platform_earnings += split.platform
            locked.total_fees_collected += locked.entry_fee
            locked.save(
                update_fields=[
                    "current_prize_pool",
                    "organizer_earnings",
                    "platform_earnings",
                    "total_fees_collected",
                ]
            )
    except IntegrityError:
        raise AlreadyJoined("You are already registered for this tournament.")

    logger.info(f"User {user.username} joined tournament {locked.pk} ({locked.title}).")
    notify("tournament_joined", user, {"tournament_name": locked.title})
    return participant


def recalculate_prize_pool(tournament: Tournament, commission: CommissionSettings = None, now=None):
    """
    Re-derives the pool and earnings from the actual participant count and
    the current commission settings.
    """
    if commission is None:
        commission = get_commission_settings()
    now = now or timezone.now()

    with transaction.atomic():
        locked = _lock(tournament)
        if locked.status not in (Tournament.Status.UPCOMING, Tournament.Status.ONGOING):
            raise InvalidStateTransition(
                f"Cannot recalculate the prize pool of a {locked.status} tournament."
            )

        participant_count = locked.participant_entries.count()
        total_fees = (locked.entry_fee * participant_count).quantize(CENT)
        split = compute_entry_fee_split(total_fees, commission)

        locked.current_prize_pool = split.prize
        locked.organizer_earnings = split.organizer
        locked.platform_earnings = split.platform
        locked.total_fees_collected = total_fees
        locked.prize_pool_recalculated_at = now
        locked.save(
            update_fields=[
                "current_prize_pool",
                "organizer_earnings",
                "platform_earnings",
                "total_fees_collected",
                "prize_pool_recalculated_at",
            ]
        )

    logger.info(
        f"Recalculated tournament {locked.pk}: {participant_count} participants, "
        f"prize pool {split.prize}."
    )
    return {
        "tournament_id": locked.pk,
        "title": locked.title,
        "participant_count": participant_count,
        "total_fees_collected": str(total_fees),
        "prize_pool": str(split.prize),
        "organizer_earnings": str(split.organizer),
        "platform_earnings": str(split.platform),
    }


def tournaments_due_for_recalculation(now=None):
    now = now or timezone.now()
    return Tournament.objects.due_for_recalculation(
        now + settings.PRIZE_POOL_RECALC_WINDOW_START,
        now + settings.PRIZE_POOL_RECALC_WINDOW_END,
    )


def recalculate_due_prize_pools(now=None):
    """
    Recalculates every tournament about to start. A failure on one
    tournament is reported in its result entry and does not stop the rest.
    """
    now = now or timezone.now()
    commission = get_commission_settings()
    results = []
    for tournament in tournaments_due_for_recalculation(now):
        try:
            figures = recalculate_prize_pool(tournament, commission=commission, now=now)
            results.append({"success": True, **figures})
        except Exception as e:
            logger.exception(f"Prize pool recalculation failed for tournament {tournament.pk}")
            results.append({"success": False, "tournament_id": tournament.pk, "error": str(e)})
    return {"processed": len(results), "results": results}


def start_due_tournaments(now=None):
    """Moves upcoming tournaments whose start time has passed to ongoing."""
    now = now or timezone.now()
    due_ids = list(
        Tournament.objects.upcoming().filter(start_date__lte=now).values_list("pk", flat=True)
    )
    if not due_ids:
        return 0

    started = Tournament.objects.filter(
        pk__in=due_ids, status=Tournament.Status.UPCOMING
    ).update(status=Tournament.Status.ONGOING)

    for participant in Participant.objects.filter(tournament_id__in=due_ids).select_related(
        "user", "tournament"
    ):
        notify(
            "match_starting",
            participant.user,
            {"tournament_name": participant.tournament.title, "time": "a few minutes"},
        )
    logger.info(f"Started {started} tournament(s).")
    return started


def declare_winner(tournament: Tournament, winner: User, declared_by: User):
    """
    Completes an ongoing tournament and pays out: the prize pool to the
    winner and the accumulated organizer earnings to the organizer.
    """
    if winner is None:
        raise InvalidWinner("Please select a winner.")
    ensure_can_manage(tournament, declared_by)

    with transaction.atomic():
        locked = _lock(tournament)
        if locked.winner_id is not None:
            raise InvalidStateTransition("A winner has already been declared for this tournament.")
        if not locked.can_transition_to(Tournament.Status.COMPLETED):
            raise InvalidStateTransition(
                f"A winner can only be declared for an ongoing tournament, not a {locked.status} one."
            )
        if not Participant.objects.filter(tournament=locked, user=winner).exists():
            raise InvalidWinner("The winner must be a participant of this tournament.")

        locked.winner = winner
        locked.winner_declared_at = timezone.now()
        locked.status = Tournament.Status.COMPLETED
        locked.save(update_fields=["winner", "winner_declared_at", "status"])

        prize = locked.current_prize_pool
        if prize > 0:
            WalletService.credit(
                winner,
                prize,
                Transaction.TransactionType.PRIZE,
                description=f"Prize for winning {locked.title} - Rank 1",
                tournament=locked,
                rank=1,
            )
        if locked.organizer_earnings > 0:
            WalletService.credit(
                locked.organizer,
                locked.organizer_earnings,
                Transaction.TransactionType.COMMISSION,
                description=f"Commission from {locked.title}",
                tournament=locked,
            )

    logger.info(
        f"{declared_by.username} declared {winner.username} winner of tournament {locked.pk}; "
        f"prize {prize}."
    )
    notify(
        "tournament_won",
        winner,
        {"rank": 1, "prize": str(prize), "tournament_name": locked.title},
    )
    return locked


def cancel_tournament(tournament: Tournament, cancelled_by: User):
    """
    Cancels an upcoming or ongoing tournament and refunds every entry fee
    that was charged for it.
    """
    ensure_can_manage(tournament, cancelled_by)

    with transaction.atomic():
        locked = _lock(tournament)
        if not locked.can_transition_to(Tournament.Status.CANCELLED):
            raise InvalidStateTransition(f"A {locked.status} tournament cannot be cancelled.")

        entry_fees = Transaction.objects.filter(
            tournament=locked,
            transaction_type=Transaction.TransactionType.ENTRY_FEE,
            status=Transaction.Status.COMPLETED,
        ).select_related("wallet__user")
        refunds = [
            WalletService.credit(
                fee.wallet.user,
                abs(fee.amount),
                Transaction.TransactionType.REFUND,
                description=f"Refund for {locked.title}",
                tournament=locked,
            )
            for fee in entry_fees
        ]

        locked.status = Tournament.Status.CANCELLED
        locked.current_prize_pool = Decimal("0.00")
        locked.organizer_earnings = Decimal("0.00")
        locked.platform_earnings = Decimal("0.00")
        locked.total_fees_collected = Decimal("0.00")
        locked.save(
            update_fields=[
                "status",
                "current_prize_pool",
                "organizer_earnings",
                "platform_earnings",
                "total_fees_collected",
            ]
        )

    logger.info(
        f"{cancelled_by.username} cancelled tournament {locked.pk}; {len(refunds)} refund(s) issued."
    )
    for participant in locked.participant_entries.select_related("user"):
        notify("tournament_cancelled", participant.user, {"tournament_name": locked.title})
    return locked
