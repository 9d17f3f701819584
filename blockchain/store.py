"""
Trust Record Store.

In-memory key-value store of TrustRecords keyed by participant identity,
standing in for on-ledger accounts:
- each record has an owner; only records owned by this program are listed
  or written by it.
- writes are committed in batches: a batch is validated as a whole before
  any record changes, then appended to the ledger as one Block.
- every access holds one re-entrant lock; `transaction()` holds it across a
  read-compute-commit sequence so concurrent updates of the same identity
  are applied one after another.

Records are returned as copies; the only way to change a stored record is a
validated write.
"""
import logging
import threading
from contextlib import contextmanager
from typing import Dict, List, Tuple

from trust.errors import IncorrectOwnerError, RecordNotFoundError, AlreadyInitializedError
from trust.records import Identity, TrustRecord
from .block import Block

logger = logging.getLogger(__name__)


class TrustStore:
    def __init__(self, program_id: str):
        """
        Args:
            program_id (str): Owner id of the records this store manages.
        """
        self.program_id = program_id
        # identity -> (owner, record)
        self._accounts: Dict[Identity, Tuple[str, TrustRecord]] = {}
        self.blocks: List[Block] = []
        self._lock = threading.RLock()

    def __contains__(self, identity):
        with self._lock:
            return identity in self._accounts

    def __len__(self):
        with self._lock:
            return len(self._accounts)

    @contextmanager
    def transaction(self):
        """Holds the store lock for the duration of the block."""
        with self._lock:
            yield self

    def create(self, identity: Identity, record: TrustRecord, owner: str = None, now: int = None) -> Block:
        """Allocates a new record. `owner` defaults to this program."""
        owner = self.program_id if owner is None else owner
        record.validate(identity)
        with self._lock:
            if identity in self._accounts:
                raise AlreadyInitializedError(identity)
            self._accounts[identity] = (owner, record.replace())
            block = self._append_block({identity: record.trust_score}, 'InitializeParticipant',
                                       record.last_updated_timestamp if now is None else now)
        logger.debug("Created record %s owned by %s", identity, owner)
        return block

    def owner_of(self, identity: Identity) -> str:
        return self._lookup(identity)[0]

    def get(self, identity: Identity) -> TrustRecord:
        return self._lookup(identity)[1].replace()

    def get_owned(self, identity: Identity) -> TrustRecord:
        """Like get(), but raises IncorrectOwnerError for records owned by someone else."""
        owner, record = self._lookup(identity)
        if owner != self.program_id:
            raise IncorrectOwnerError(f"Record {identity} is owned by {owner}, not {self.program_id}")
        return record.replace()

    def put(self, identity: Identity, record: TrustRecord):
        """Single-record write. Equivalent to a one-record commit."""
        self.commit({identity: record}, now=record.last_updated_timestamp, instruction='Put')

    def list_owned(self) -> List[Tuple[Identity, TrustRecord]]:
        with self._lock:
            return [(vid, record.replace()) for vid, (owner, record) in self._accounts.items()
                    if owner == self.program_id]

    def commit(self, writes: Dict[Identity, TrustRecord], now: int, instruction: str = 'Commit') -> Block:
        """
        Writes a batch of records atomically.

        Every identity must exist and be owned by this program, and every
        record must hold a valid score; otherwise nothing is written.

        Returns:
            Block: The ledger entry of the batch.
        """
        with self._lock:
            for vid, record in writes.items():
                owner, _ = self._lookup(vid)
                if owner != self.program_id:
                    raise IncorrectOwnerError(f"Record {vid} is owned by {owner}, not {self.program_id}")
                record.validate(vid)

            for vid, record in writes.items():
                self._accounts[vid] = (self.program_id, record.replace())
            return self._append_block({vid: r.trust_score for vid, r in writes.items()}, instruction, now)

    def history(self, identity: Identity) -> List[Tuple[int, float]]:
        """(timestamp, score) of every ledger block that wrote `identity`, oldest first."""
        with self._lock:
            return [(b.timestamp, b.data[identity]) for b in self.blocks if identity in b.data]

    def _lookup(self, identity):
        with self._lock:
            try:
                return self._accounts[identity]
            except KeyError:
                raise RecordNotFoundError(identity) from None

    def _append_block(self, data, instruction, timestamp) -> Block:
        parents = [self.blocks[-1].id] if self.blocks else []
        block = Block(data, instruction, parents, timestamp)
        self.blocks.append(block)
        return block
