import unittest

from pyzwo.zwo.eaf_protocol import decode_position_report
from pyzwo.zwo.efw_protocol import decode_slot_report
from pyzwo.zwo.simulation import position_frame, slot_frame
from pyzwo.zwo.status import (
  WHEEL_STATUS_FAULT,
  WHEEL_STATUS_MOVING,
  WHEEL_STATUS_STABLE,
  MotionState,
  interpret_focuser_status,
  interpret_wheel_status,
)


class FocuserStatusTests(unittest.TestCase):
  def test_moving(self):
    status = decode_position_report(position_frame(25046, moving=True))
    self.assertIs(interpret_focuser_status(status), MotionState.MOVING)

  def test_settled(self):
    status = decode_position_report(position_frame(26000, moving=False))
    self.assertIs(interpret_focuser_status(status), MotionState.SETTLED)


class WheelStatusTests(unittest.TestCase):
  def classify(self, **kwargs) -> MotionState:
    return interpret_wheel_status(decode_slot_report(slot_frame(**kwargs)))

  def test_settled_at_every_slot(self):
    for k in range(1, 8):
      status = decode_slot_report(slot_frame((k, k, k), status_code=WHEEL_STATUS_STABLE))
      self.assertIs(interpret_wheel_status(status), MotionState.SETTLED)
      self.assertEqual(status.current_slot, k)

  def test_fault_status_code(self):
    for samples in ((1, 1, 1), (7, 6, 7), (2, 3, 4)):
      self.assertIs(self.classify(slot_samples=samples, status_code=WHEEL_STATUS_FAULT),
                    MotionState.FAULT)

  def test_error_code(self):
    for samples in ((1, 1, 1), (3, 2, 3)):
      for status_code in (WHEEL_STATUS_STABLE, WHEEL_STATUS_MOVING):
        self.assertIs(
          self.classify(slot_samples=samples, status_code=status_code, error_code=0x0C),
          MotionState.FAULT)

  def test_moving(self):
    self.assertIs(self.classify(slot_samples=(3, 2, 3), status_code=WHEEL_STATUS_MOVING),
                  MotionState.MOVING)
    # samples agree but the status code is not the stable one yet
    self.assertIs(self.classify(slot_samples=(3, 3, 3), status_code=WHEEL_STATUS_MOVING),
                  MotionState.MOVING)
    # stable status code but the samples still disagree
    self.assertIs(self.classify(slot_samples=(3, 3, 2), status_code=WHEEL_STATUS_STABLE),
                  MotionState.MOVING)
