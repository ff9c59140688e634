import random
from typing import List, Optional, Tuple
from dataclasses import dataclass
from faker import Faker

SPECIAL_SYMBOLS = ("*", "#")

## === Config Classes === ##

@dataclass
class PhoneConfig:
    """
    Configuration for PhoneGenerator
        min_len: int, shortest generated number
        max_len: int, longest generated number
        special_share: float, per-symbol chance of '*' or '#' instead of a digit
        seed: int, seed for random number generator
    """
    min_len: int = 6
    max_len: int = 12
    special_share: float = 0.0
    seed: Optional[int] = None

    def __post_init__(self):
        if self.min_len < 1:
            raise ValueError("min_len must be at least 1")
        if self.max_len < self.min_len:
            raise ValueError("max_len must be >= min_len")
        if not 0.0 <= self.special_share <= 1.0:
            raise ValueError("special_share must be between 0 and 1")


@dataclass
class RuleConfig:
    """
    Configuration for rule generation
        prefix_min: int, shortest rule prefix (source and target)
        prefix_max: int, longest rule prefix
        shared_target_share: float, chance a rule reuses an earlier target,
            so reverse lookups see several sources per target
    """
    prefix_min: int = 1
    prefix_max: int = 6
    shared_target_share: float = 0.2

    def __post_init__(self):
        if self.prefix_min < 1:
            raise ValueError("prefix_min must be at least 1")
        if self.prefix_max < self.prefix_min:
            raise ValueError("prefix_max must be >= prefix_min")
        if not 0.0 <= self.shared_target_share <= 1.0:
            raise ValueError("shared_target_share must be between 0 and 1")


class PhoneGenerator:
    def __init__(self, config: PhoneConfig):
        self.config = config
        self.rng = random.Random(self.config.seed)

        self.fake = Faker()
        if self.config.seed is not None:
            self.fake.seed_instance(self.config.seed)

    def _number(self, length: int) -> str:
        digits = self.fake.numerify("#" * length)
        share = self.config.special_share
        if share <= 0:
            return digits
        return "".join(
            self.rng.choice(SPECIAL_SYMBOLS) if self.rng.random() < share else d
            for d in digits
        )

    def _alphabet_size(self) -> int:
        share = self.config.special_share
        if share >= 1.0:
            return len(SPECIAL_SYMBOLS)
        return 12 if share > 0 else 10

    def single(self) -> str:
        return self._number(self.rng.randint(self.config.min_len, self.config.max_len))

    def batch(self, n: int) -> List[str]:
        if n <= 0:
            raise ValueError("n must be positive")
        return [self.single() for _ in range(n)]

    def prefixes(self, n: int, rule_config: Optional[RuleConfig] = None) -> List[str]:
        """n distinct prefixes with lengths in [prefix_min, prefix_max]."""
        cfg = rule_config or RuleConfig()
        if n <= 0:
            raise ValueError("n must be positive")
        k = self._alphabet_size()
        capacity = sum(k ** L for L in range(cfg.prefix_min, cfg.prefix_max + 1))
        # keep rejection sampling cheap: never ask for more than half the space
        if n > capacity // 2:
            raise ValueError(f"n must be at most {capacity // 2} for prefix lengths "
                             f"{cfg.prefix_min}..{cfg.prefix_max}")

        seen = set()
        out = []
        while len(out) < n:
            p = self._number(self.rng.randint(cfg.prefix_min, cfg.prefix_max))
            if p in seen:
                continue
            seen.add(p)
            out.append(p)
        return out

    def rules(self, n: int, rule_config: Optional[RuleConfig] = None) -> List[Tuple[str, str]]:
        """n (from, to) rewrite rules with distinct sources and from != to."""
        cfg = rule_config or RuleConfig()
        sources = self.prefixes(n, cfg)
        targets: List[str] = []
        out = []
        for src in sources:
            if targets and self.rng.random() < cfg.shared_target_share:
                dst = self.rng.choice(targets)
            else:
                dst = self._number(self.rng.randint(cfg.prefix_min, cfg.prefix_max))
            if dst == src:
                dst = src + self.fake.numerify("#")
            targets.append(dst)
            out.append((src, dst))
        return out
