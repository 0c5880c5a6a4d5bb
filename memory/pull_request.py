"""
Encoding of arm pull requests.

A request is a single int that addresses an arm either by its rank in the
ranked view or by its creation index. Non-negative requests are ranks;
negative requests encode index i as -1 - i.
"""


def encode(position: int, use_ranked: bool) -> int:
    """
    Build a pull request.

    Parameters
    ----------
    position : int
        Rank of the arm if use_ranked, otherwise its creation index.
    use_ranked : bool
        Whether position refers to the ranked view.
    """
    if position < 0:
        raise ValueError(f"position must be non-negative, got {position}")
    if use_ranked:
        return position
    return -1 - position


def by_rank(rank: int) -> int:
    return encode(rank, True)


def by_index(index: int) -> int:
    return encode(index, False)


def for_arm(arm) -> int:
    """Request the given ArmRecord through its stable index."""
    return by_index(arm.index)


def uses_ranked_view(request: int) -> bool:
    return request >= 0


def position(request: int) -> int:
    """Position of the requested arm in whichever view the request uses."""
    if uses_ranked_view(request):
        return request
    return -1 - request


def decode(request: int) -> tuple:
    return position(request), uses_ranked_view(request)
