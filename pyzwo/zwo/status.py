import enum

from pyzwo.zwo.eaf_protocol import FocuserStatus
from pyzwo.zwo.efw_protocol import WheelStatus

WHEEL_STATUS_STABLE = 1
WHEEL_STATUS_MOVING = 4
WHEEL_STATUS_FAULT = 6


class MotionState(enum.Enum):
  SETTLED = enum.auto()
  MOVING = enum.auto()
  FAULT = enum.auto()


def interpret_focuser_status(status: FocuserStatus) -> MotionState:
  """ The focuser has no fault flag in its report. Faults show up as transport errors. """
  return MotionState.MOVING if status.moving else MotionState.SETTLED


def interpret_wheel_status(status: WheelStatus) -> MotionState:
  """ Classify a slot report.

  A fault status code or any error code means the wheel needs a hard reset, whatever the slot
  samples say. Settled only when all three slot samples agree and the status code is the stable
  one. Anything else is still moving.
  """
  if status.status_code == WHEEL_STATUS_FAULT or status.error_code != 0:
    return MotionState.FAULT
  s0, s1, s2 = status.slot_samples
  if s0 == s1 == s2 and status.status_code == WHEEL_STATUS_STABLE:
    return MotionState.SETTLED
  return MotionState.MOVING
