"""
Block Structure for the Trust Ledger.

A block records one committed write batch:
- ID
- Timestamp (the `now` the batch was committed at)
- Instruction that produced it
- Data (identity -> trust score written)
- Parent Block IDs (previous block; empty for genesis)
"""
import uuid


class Block:
    def __init__(self, data, instruction, parents, timestamp=0):
        self.id = str(uuid.uuid4())[:8]
        # Caller-supplied clock, never wall-clock time
        self.timestamp = timestamp
        self.instruction = instruction
        self.data = data
        self.parents = parents

    def __repr__(self):
        return f"[Block {self.id} | {self.instruction} | t={self.timestamp} | Records: {len(self.data)}]"
