from __future__ import annotations

import hashlib
import json
import logging
import random
from dataclasses import dataclass
from typing import Any, Optional, Union

logger = logging.getLogger(__name__)

Seed = Union[int, str, bytes, None]


def _to_stable_json(value: Any) -> str:
    """Stable JSON encoding for hashing.

    Ordering and separators are fixed so that derived seeds do not change across
    runs or Python versions.
    """
    return json.dumps(value, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def _canonicalize_seed(seed: Seed) -> bytes:
    if seed is None:
        return b""
    if isinstance(seed, bytes):
        return seed
    if isinstance(seed, bool):
        raise TypeError("Unsupported seed type: %r" % (type(seed),))
    if isinstance(seed, int):
        # One extra bit for the sign of negative seeds
        length = (seed.bit_length() + (8 if seed < 0 else 7)) // 8 or 1
        return seed.to_bytes(length, "big", signed=seed < 0)
    if isinstance(seed, str):
        s = seed.strip()
        if s.startswith("0x"):
            try:
                val = int(s, 16)
                length = (val.bit_length() + 7) // 8 or 1
                return val.to_bytes(length, "big", signed=False)
            except ValueError:
                return s.encode("utf-8")
        return s.encode("utf-8")
    raise TypeError("Unsupported seed type: %r" % (type(seed),))


def derive_seed(master_seed: Seed, domain: str, *identifiers: Any) -> int:
    """Derive a 64-bit integer seed from a master seed and domain identifiers.

    Domain examples: "level" with the depth as identifier. The result does not
    depend on how many other seeds were derived before, so a floor looks the
    same whatever order floors are visited in.
    """
    payload = {
        "domain": domain,
        "ids": identifiers,
        "master": _canonicalize_seed(master_seed).hex(),
        "algo": "blake2b-64",
        "version": 1,
    }
    data = _to_stable_json(payload).encode("utf-8")
    h = hashlib.blake2b(data, digest_size=8)
    seed_int = int.from_bytes(h.digest(), "big", signed=False)
    logger.debug("Derived seed for domain=%s ids=%s -> %d", domain, identifiers, seed_int)
    return seed_int


@dataclass
class RandomSource:
    """
    A thin wrapper around random.Random that supplies uniform integers in [lo, hi).

    - centralizes RNG handling for generation and spawn sampling
    - supports optional deterministic seeding for tests
    """

    seed: Optional[int] = None

    def __post_init__(self) -> None:
        if self.seed is not None:
            self._rng = random.Random(self.seed)
            logger.debug("Initialized RandomSource with deterministic seed=%s", self.seed)
        else:
            self._rng = random.Random()
            logger.debug("Initialized RandomSource with non-deterministic seed")

    def int_in_range(self, lo: int, hi: int) -> int:
        """Uniform integer in the half-open range [lo, hi)."""
        if hi <= lo:
            raise ValueError(f"Empty sampling range [{lo}, {hi})")
        return self._rng.randrange(lo, hi)


__all__ = ["RandomSource", "derive_seed", "Seed"]
