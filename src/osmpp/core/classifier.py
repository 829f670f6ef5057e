# core/classifier.py
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Literal

NETWORK_TYPE_KEY = "network:type"
NODE_NETWORK = "node_network"

TurningKind = Literal["turning_circle", "turning_loop"]
TURNING_KINDS: frozenset[str] = frozenset({"turning_circle", "turning_loop"})


@dataclass(frozen=True)
class NetworkFamily:
    """
    One sub-network of a node network.
    `ref_keys` is a priority chain: the first key present on the node wins.
    """

    category: str
    ref_keys: tuple[str, ...]


NETWORK_FAMILIES: tuple[NetworkFamily, ...] = (
    NetworkFamily("node_bicycle", ("icn_ref", "ncn_ref", "rcn_ref", "lcn_ref")),
    NetworkFamily("node_hiking", ("iwn_ref", "nwn_ref", "rwn_ref", "lwn_ref")),
    NetworkFamily("node_inline_skates", ("rin_ref",)),
    NetworkFamily("node_horse", ("rhn_ref",)),
    NetworkFamily("node_canoe", ("rpn_ref",)),
    NetworkFamily("node_motorboat", ("rmn_ref",)),
)


# ------------------- Outcomes ---------------------------


@dataclass(frozen=True)
class NetworkJunction:
    category: str
    ref_key: str
    ref: str


@dataclass(frozen=True)
class TurningFeature:
    kind: TurningKind


Outcome = NetworkJunction | TurningFeature


# ------------------- Rules ---------------------------


def is_network_junction(tags: Mapping[str, str]) -> bool:
    return tags.get(NETWORK_TYPE_KEY) == NODE_NETWORK


def network_outcomes(tags: Mapping[str, str]) -> list[NetworkJunction]:
    if not is_network_junction(tags):
        return []
    out: list[NetworkJunction] = []
    for fam in NETWORK_FAMILIES:
        for key in fam.ref_keys:
            if key in tags:
                out.append(NetworkJunction(fam.category, key, tags[key]))
                break
    return out


def turning_outcome(tags: Mapping[str, str]) -> TurningFeature | None:
    kind = tags.get("highway")
    if kind in TURNING_KINDS:
        return TurningFeature(kind)
    return None


def classify(tags: Mapping[str, str]) -> tuple[Outcome, ...]:
    """
    Map a node's tags to every outcome that applies, network junctions first
    (in family order), then the turning feature if any. No match -> ().
    """
    if not tags:
        return ()
    outcomes: list[Outcome] = list(network_outcomes(tags))
    turning = turning_outcome(tags)
    if turning is not None:
        outcomes.append(turning)
    return tuple(outcomes)
