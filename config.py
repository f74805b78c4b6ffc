"""
Consume set configuration
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import List, Optional

from consts import G1_COMPRESSED
from hash_to_field import Hasher, hasher_by_name

logger = logging.getLogger(__name__)


@dataclass
class LogConfig:
    """Logging configuration."""
    level: str = "INFO"
    file: Optional[str] = None
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass
class ConsumeSetConfig:
    """
    Parameters of an on-chain consume set.

    `pwrs_of_tau_g1_compressed` must hold at least `max_elems_per_call + 1`
    powers: z(x) for k elements has k + 1 coefficients.
    """
    max_elems_per_call: int
    pwrs_of_tau_g1_compressed: List[bytes]
    reject_duplicate_roots: bool = True
    # Name of the hashlib function mapping elements to roots. The prover
    # must use the same one
    hash_fn: str = "sha256"
    log: LogConfig = field(default_factory=LogConfig)

    def __post_init__(self):
        self.pwrs_of_tau_g1_compressed = [bytes(p) for p in self.pwrs_of_tau_g1_compressed]
        errors = self.validate()
        if errors:
            raise ValueError("; ".join(errors))

    @property
    def hasher(self) -> Hasher:
        return hasher_by_name(self.hash_fn)

    def validate(self) -> List[str]:
        """
        Validate configuration.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if self.max_elems_per_call < 1:
            errors.append("max_elems_per_call must be at least 1")
        # nElems travels as a single byte
        if self.max_elems_per_call > 255:
            errors.append("max_elems_per_call must fit in a u8")

        if len(self.pwrs_of_tau_g1_compressed) < self.max_elems_per_call + 1:
            errors.append(
                f"need {self.max_elems_per_call + 1} powers of tau, "
                f"got {len(self.pwrs_of_tau_g1_compressed)}"
            )
        for i, p in enumerate(self.pwrs_of_tau_g1_compressed):
            if len(p) != G1_COMPRESSED:
                errors.append(f"power of tau {i} is {len(p)} bytes, expected {G1_COMPRESSED}")

        try:
            hasher_by_name(self.hash_fn)
        except ValueError as e:
            errors.append(str(e))

        return errors

    def to_dict(self) -> dict:
        """Export configuration as dictionary."""
        return {
            "max_elems_per_call": self.max_elems_per_call,
            "pwrs_of_tau_g1_compressed": [p.hex() for p in self.pwrs_of_tau_g1_compressed],
            "reject_duplicate_roots": self.reject_duplicate_roots,
            "hash_fn": self.hash_fn,
            "log": {
                "level": self.log.level,
                "file": self.log.file,
                "format": self.log.format,
            },
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ConsumeSetConfig":
        """Powers of tau are hex strings, as written by `to_dict`."""
        return cls(
            max_elems_per_call=data["max_elems_per_call"],
            pwrs_of_tau_g1_compressed=[
                bytes.fromhex(p) for p in data["pwrs_of_tau_g1_compressed"]
            ],
            reject_duplicate_roots=data.get("reject_duplicate_roots", True),
            hash_fn=data.get("hash_fn", "sha256"),
            log=LogConfig(**data.get("log", {})),
        )

    def save(self, path: str) -> None:
        """Save configuration to file."""
        with open(path, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)

        logger.info(f"Configuration saved to {path}")

    @classmethod
    def from_json_file(cls, path: str) -> "ConsumeSetConfig":
        """Load configuration from file."""
        with open(path, 'r') as f:
            data = json.load(f)

        config = cls.from_dict(data)
        logger.info(f"Configuration loaded from {path}")
        return config


def setup_logging(config: LogConfig) -> None:
    """Configure logging based on config."""
    level = getattr(logging, config.level.upper(), logging.INFO)

    handlers: List[logging.Handler] = [logging.StreamHandler()]

    if config.file:
        handlers.append(logging.FileHandler(config.file))

    logging.basicConfig(
        level=level,
        format=config.format,
        handlers=handlers,
        force=True,
    )
