import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

LOG_FROM_STRING = {
  "IO": 5,
  "DEBUG": logging.DEBUG,
  "INFO": logging.INFO,
  "WARNING": logging.WARNING,
  "ERROR": logging.ERROR,
  "CRITICAL": logging.CRITICAL,
}

LOG_TO_STRING = {v: k for k, v in LOG_FROM_STRING.items()}


@dataclass
class Config:
  """The configuration object for pyzwo."""

  @dataclass
  class Logging:
    """The logging configuration."""

    level: int = logging.INFO
    log_dir: Optional[Path] = None

  @dataclass
  class Polling:
    """Timing of the status polling loops.

    `interval` is the fixed delay in seconds between two status polls. `wheel_step_attempts` is
    the number of polls the filter wheel gets to settle after each single-slot step.
    """

    interval: float = 0.5
    wheel_step_attempts: int = 100

  logging: Logging = field(default_factory=Logging)
  polling: Polling = field(default_factory=Polling)

  @classmethod
  def from_dict(cls, d: dict) -> "Config":
    logging_data = d.get("logging", {})
    polling_data = d.get("polling", {})
    return cls(
      logging=cls.Logging(
        level=LOG_FROM_STRING[logging_data.get("level", "INFO")],
        log_dir=Path(logging_data["log_dir"]) if logging_data.get("log_dir") else None,
      ),
      polling=cls.Polling(
        interval=float(polling_data.get("interval", 0.5)),
        wheel_step_attempts=int(polling_data.get("wheel_step_attempts", 100)),
      ),
    )

  @property
  def as_dict(self) -> dict:
    return {
      "logging": {
        "level": LOG_TO_STRING[self.logging.level],
        "log_dir": str(self.logging.log_dir) if self.logging.log_dir is not None else None,
      },
      "polling": {
        "interval": self.polling.interval,
        "wheel_step_attempts": self.polling.wheel_step_attempts,
      },
    }
