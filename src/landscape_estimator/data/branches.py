"""Service branch reference data and branch-name normalisation."""

from __future__ import annotations

from typing import Optional

from ..errors import InvalidArgumentError
from ..models.domain import Coordinate, ServiceBranch

BRANCHES: tuple[ServiceBranch, ...] = (
    ServiceBranch(
        code="phx-sw",
        name="Phoenix - SouthWest",
        address="2600 S 20th Ave, Phoenix, AZ 85009",
        market="PHX",
        location=Coordinate(33.423938, -112.102994),
    ),
    ServiceBranch(
        code="phx-se",
        name="Phoenix - SouthEast",
        address="1715 N Arizona Ave, Chandler, AZ 85225",
        market="PHX",
        location=Coordinate(33.3321053, -111.8412433),
    ),
    ServiceBranch(
        code="phx-n",
        name="Phoenix - North",
        address="23325 N 23rd Avenue, Suite 160, Phoenix, AZ 85027",
        market="PHX",
        location=Coordinate(33.6971946, -112.1053995),
    ),
    ServiceBranch(
        code="lv-main",
        name="Las Vegas",
        address="6290 S Pecos Rd, Las Vegas, NV 89120",
        market="LV",
        location=Coordinate(36.0758681, -115.1002532),
    ),
)

BRANCH_CODES: frozenset[str] = frozenset(branch.code for branch in BRANCHES)

# Branch spellings found in import spreadsheets
BRANCH_ALIASES = {
    "phx - southeast": "phx-se",
    "phx - southwest": "phx-sw",
    "phx - north": "phx-n",
    "las vegas": "lv-main",
    "lv": "lv-main",
}

EXPECTED_BRANCH_NAMES = ('"Phx - SouthEast"', '"Phx - SouthWest"', '"Phx - North"', '"Las Vegas"')


def get_branch(code: str) -> ServiceBranch:
    """Look up a branch by canonical code (case-insensitive)."""

    normalized = (code or "").strip().lower()
    if not normalized:
        raise InvalidArgumentError("Branch identifier is required.")
    for branch in BRANCHES:
        if branch.code == normalized:
            return branch
    raise InvalidArgumentError(f"Unknown branch '{code}'. Expected one of: {', '.join(sorted(BRANCH_CODES))}")


def branches_for_market(market: str | None = None) -> tuple[ServiceBranch, ...]:
    if not market:
        return BRANCHES
    wanted = market.strip().upper()
    return tuple(branch for branch in BRANCHES if branch.market == wanted)


def normalize_branch(raw: Optional[str]) -> Optional[str]:
    """Map a free-text branch name to its canonical code, or None if unrecognised."""

    if not raw:
        return None
    normalized = " ".join(str(raw).strip().lower().split())
    if normalized in BRANCH_CODES:
        return normalized
    return BRANCH_ALIASES.get(normalized)
