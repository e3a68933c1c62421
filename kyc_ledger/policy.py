"""Quorum threshold rules for customer validity and bank permission.

Both rules share one population gate: below ``QUORUM_MIN_BANKS`` registered
banks, downvotes and reports never invalidate anything. At or above it, a
count strictly greater than a third of the bank population (integer
division) does.
"""

QUORUM_MIN_BANKS = 5


def _over_quorum(count: int, total_banks: int) -> bool:
    return total_banks >= QUORUM_MIN_BANKS and count > total_banks // 3


def customer_is_valid(upvotes: int, downvotes: int, total_banks: int) -> bool:
    """Whether a customer should be marked verified.

    Parameters
    ----------
    upvotes : int
        Upvotes accumulated since registration or last modification.
    downvotes : int
        Downvotes accumulated since registration or last modification.
    total_banks : int
        Number of currently registered banks.

    Returns
    -------
    bool
        False when downvotes outnumber upvotes, or when downvotes exceed
        the quorum share; True otherwise.
    """
    if upvotes < downvotes:
        return False
    if _over_quorum(downvotes, total_banks):
        return False
    return True


def bank_is_valid(count: int, total_banks: int) -> bool:
    """Whether a bank keeps its permission to perform KYC actions.

    ``count`` is either a customer's downvote tally (during voting) or the
    bank's own report count (during an administrator review).
    """
    return not _over_quorum(count, total_banks)
