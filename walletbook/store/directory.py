"""Directory of wallets keyed by user id.

The directory is the only place that knows which wallet belongs to which
user; ledgers and budget trackers hold no reference back to it.
"""

from dataclasses import dataclass, field
from typing import Any

from walletbook.domain.budget import BudgetTracker
from walletbook.domain.ledger import Ledger
from walletbook.domain.models import UserId
from walletbook.domain.results import Err, ErrorKind, Ok, Result, invalid
from walletbook.domain.snapshot import ImportStats, export_snapshot, merge_snapshot
from walletbook.domain.transfer import TransferOutcome, transfer
from walletbook.logging_utils import get_logger

logger = get_logger(__name__)


@dataclass
class Wallet:
    """A ledger paired with its budget tracker."""

    ledger: Ledger = field(default_factory=Ledger)
    budgets: BudgetTracker = field(init=False)

    def __post_init__(self) -> None:
        self.budgets = BudgetTracker(self.ledger)


def normalize_user_id(user_id: str | None) -> UserId | None:
    """Trim and lowercase a user id; None if blank."""
    if user_id is None or not user_id.strip():
        return None
    return UserId(user_id.strip().lower())


class WalletDirectory:
    """Arena of wallets indexed by normalized user id."""

    def __init__(self) -> None:
        self._wallets: dict[UserId, Wallet] = {}

    def __contains__(self, user_id: object) -> bool:
        return isinstance(user_id, str) and normalize_user_id(user_id) in self._wallets

    def __len__(self) -> int:
        return len(self._wallets)

    def user_ids(self) -> list[UserId]:
        return sorted(self._wallets)

    def get(self, user_id: str | None) -> Wallet | None:
        key = normalize_user_id(user_id)
        return self._wallets.get(key) if key else None

    def create(self, user_id: str | None) -> Result[Wallet]:
        """Create an empty wallet for a new user.

        Returns:
            Ok with the new wallet, Err(VALIDATION) for a blank id, or
            Err(CONFLICT) if the user already has a wallet.
        """
        key = normalize_user_id(user_id)
        if key is None:
            return invalid("user id must not be blank")
        if key in self._wallets:
            return Err(ErrorKind.CONFLICT, f"user already exists: {key}")
        wallet = Wallet()
        self._wallets[key] = wallet
        logger.debug("Created wallet for %s", key)
        return Ok(wallet)

    def remove(self, user_id: str | None) -> bool:
        """Discard a user's wallet; False if there was none."""
        key = normalize_user_id(user_id)
        return key is not None and self._wallets.pop(key, None) is not None

    def transfer(
        self,
        sender_id: str | None,
        receiver_id: str | None,
        amount: float,
        memo: str | None = None,
    ) -> TransferOutcome:
        """Transfer between two users of this directory."""
        sender = self.get(sender_id)
        receiver = self.get(receiver_id)
        return transfer(
            sender.ledger if sender else None,
            receiver.ledger if receiver else None,
            normalize_user_id(sender_id),
            normalize_user_id(receiver_id),
            amount,
            memo,
        )

    def to_document(self) -> dict[str, Any]:
        """Serialize every wallet as {"wallets": {user_id: snapshot}}.

        Each wallet entry also carries its spend cache under "spent" so that
        spend moved by category renames survives a reload.
        """
        return {
            "wallets": {
                user_id: {
                    **export_snapshot(wallet.ledger, wallet.budgets),
                    "spent": wallet.ledger.spent_by_category(),
                }
                for user_id, wallet in self._wallets.items()
            }
        }

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> "WalletDirectory":
        """Rebuild a directory from ``to_document`` output.

        Wallet entries that are not objects are skipped; record-level defects
        inside a wallet are handled like a snapshot import.
        """
        directory = cls()
        wallets = document.get("wallets")
        if not isinstance(wallets, dict):
            return directory

        for user_id, snapshot in wallets.items():
            if not isinstance(snapshot, dict):
                logger.warning("Skipping wallet %r: expected an object", user_id)
                continue
            created = directory.create(user_id)
            if isinstance(created, Err):
                logger.warning("Skipping wallet %r: %s", user_id, created.message)
                continue
            stats: ImportStats = merge_snapshot(created.value.ledger, created.value.budgets, snapshot)
            if stats.rejected:
                logger.warning("Wallet %s: %d invalid transaction(s) skipped", user_id, stats.rejected)

            spent = snapshot.get("spent")
            if isinstance(spent, dict):
                created.value.ledger.restore_spent(spent)
            elif spent is not None:
                logger.warning("Wallet %s: ignoring 'spent', expected an object", user_id)
        return directory
