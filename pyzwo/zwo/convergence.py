""" Pieces of the convergence loops shared by the focuser and the filter wheel backends. """

import asyncio
import enum
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional, TypeVar

from pyzwo.zwo.errors import DeviceFaultError, InvalidTargetError
from pyzwo.zwo.status import MotionState

logger = logging.getLogger(__name__)

S = TypeVar("S")

DEFAULT_POLL_INTERVAL = 0.5


class OutcomeKind(enum.Enum):
  REACHED = "reached"
  FAULT = "fault"
  ABORTED = "aborted"


@dataclass(frozen=True)
class ConvergenceOutcome:
  """ How a move ended. """

  kind: OutcomeKind
  value: Optional[int] = None
  reason: Optional[str] = None

  @classmethod
  def reached(cls, value: int) -> "ConvergenceOutcome":
    return cls(kind=OutcomeKind.REACHED, value=value)

  @classmethod
  def fault(cls, reason: str) -> "ConvergenceOutcome":
    return cls(kind=OutcomeKind.FAULT, reason=reason)

  @classmethod
  def aborted(cls, reason: str) -> "ConvergenceOutcome":
    return cls(kind=OutcomeKind.ABORTED, reason=reason)

  @property
  def exit_code(self) -> int:
    return 0 if self.kind is OutcomeKind.REACHED else 2


@dataclass(frozen=True)
class TargetRequest:
  """ An absolute target, or an offset from the current value when `relative` is set. """

  value: int
  relative: bool = False

  @classmethod
  def parse(cls, text: str, limit: int = 0xFFFF) -> "TargetRequest":
    """ Parse "N", "+N" or "-N".

    The magnitude is checked against `limit` here. The real bound is only known once the device
    has reported it, see `resolve`.

    Raises:
      InvalidTargetError: if `text` is not an integer or its magnitude exceeds `limit`.
    """
    text = text.strip()
    sign = 1
    relative = text[:1] in ("+", "-")
    if relative:
      sign = -1 if text[0] == "-" else 1
      text = text[1:]
    if not (text.isascii() and text.isdigit()):
      raise InvalidTargetError(f"invalid position requested: {text!r}")
    magnitude = int(text)
    if magnitude > limit:
      raise InvalidTargetError(f"invalid position requested: {magnitude}")
    return cls(value=sign * magnitude, relative=relative)

  def resolve(self, current: int) -> int:
    return current + self.value if self.relative else self.value


def validate_target(target: int, lower: int, upper: int):
  if not lower <= target <= upper:
    raise InvalidTargetError(f"invalid target {target}, must be between {lower} and {upper}")


async def poll_until_settled(
  poll: Callable[[], Awaitable[S]],
  interpret: Callable[[S], MotionState],
  interval: float = DEFAULT_POLL_INTERVAL,
  max_attempts: Optional[int] = None,
  accept: Optional[Callable[[S], bool]] = None,
  on_status: Optional[Callable[[S], None]] = None,
) -> Optional[S]:
  """ Poll at a fixed interval until the device reports a settled state.

  Args:
    poll: Fetches and decodes one status report.
    interpret: Classifies a status report.
    interval: Seconds to sleep between two polls.
    max_attempts: Give up after this many polls. `None` polls forever.
    accept: Extra condition a settled status has to meet, e.g. being at the target.
    on_status: Called with every status that was polled.

  Returns:
    The settled status, or `None` if `max_attempts` polls went by without one.

  Raises:
    DeviceFaultError: as soon as a fault is reported.
  """
  attempt = 0
  while max_attempts is None or attempt < max_attempts:
    status = await poll()
    if on_status is not None:
      on_status(status)
    state = interpret(status)
    if state is MotionState.FAULT:
      raise DeviceFaultError(f"unrecoverable device error ({status})")
    if state is MotionState.SETTLED and (accept is None or accept(status)):
      return status
    attempt += 1
    await asyncio.sleep(interval)
  logger.debug("device did not settle within %s polls", max_attempts)
  return None
