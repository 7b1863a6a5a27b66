""" Simulated ZWO devices at the feature report level, for testing backends without hardware.

The simulators answer the same frames the real devices were observed to send, including the
filter wheel's habit of faulting when asked to jump more than one slot forward.
"""

import struct
from typing import List, Optional

from pyzwo.io.mock import MockFeatureReportIO
from pyzwo.zwo.efw_protocol import EXPECTED_INFO_REPORT, NUM_SLOTS
from pyzwo.zwo.protocol import IN_REPORT_ID, MAGIC, OUT_REPORT_ID, REPORT_LEN
from pyzwo.zwo.status import WHEEL_STATUS_FAULT, WHEEL_STATUS_MOVING, WHEEL_STATUS_STABLE


def position_frame(
  position: int,
  moving: bool = False,
  max_position: int = 0xEA60,
  aux1: int = 0x7F,
  aux2: int = 0xD2,
  undefined: int = 0x32,
) -> bytes:
  """ A focuser position report, e.g. 017e5a030000000061a8007fd232ea60 for 25000. """
  return (
    bytes([IN_REPORT_ID]) + MAGIC + bytes([0x03, int(moving), 0, 0, 0])
    + struct.pack(">H", position) + bytes([0, aux1, aux2, undefined])
    + struct.pack(">H", max_position)
  )


def slot_frame(
  slot_samples=(1, 1, 1),
  status_code: int = WHEEL_STATUS_STABLE,
  error_code: int = 0,
  num_slots: int = NUM_SLOTS,
) -> bytes:
  """ A filter wheel slot report, e.g. 017e5a01010003030307000000003000 for slot 3. """
  return (
    bytes([IN_REPORT_ID]) + MAGIC + bytes([0x01, status_code, error_code, *slot_samples])
    + bytes([num_slots, 0, 0, 0, 0, 0x30, 0x00])
  )


class _SimulatedZWODevice(MockFeatureReportIO):
  """ Dispatches sent commands to `handle_command`, and reads to `respond`. """

  def __init__(self, manufacturer: Optional[str] = "ZWO", product: Optional[str] = None):
    super().__init__(manufacturer=manufacturer, product=product)
    self._last_query: Optional[bytes] = None

  async def send_feature_report(self, data: bytes) -> int:
    written = await super().send_feature_report(data)
    assert data[0] == OUT_REPORT_ID and data[1:3] == MAGIC, f"bad frame {data.hex()}"
    self.handle_command(bytes(data[3:5]), bytes(data))
    return written

  def handle_command(self, command: bytes, data: bytes):
    self._last_query = command

  def respond(self) -> bytes:
    if len(self.responses) > 0:
      return super().respond()
    frame = self.answer(self._last_query)
    assert len(frame) == REPORT_LEN
    return frame

  def answer(self, query: Optional[bytes]) -> bytes:
    raise NotImplementedError


class SimulatedEAF(_SimulatedZWODevice):
  """ A focuser that moves `step` units towards its target on every position query. """

  def __init__(self, position: int = 25000, max_position: int = 0xEA60, step: int = 130,
               target: Optional[int] = None):
    super().__init__(product="EAF")
    self.position = position
    self.max_position = max_position
    self.step = step
    self.target = position if target is None else target

  def handle_command(self, command: bytes, data: bytes):
    if command == b"\x03\x01":
      self.target, = struct.unpack_from(">H", data, 8)
    else:
      super().handle_command(command, data)

  def answer(self, query: Optional[bytes]) -> bytes:
    assert query == b"\x02\x03", f"unexpected query {query!r}"
    moving = self.position != self.target
    if moving:
      delta = max(-self.step, min(self.step, self.target - self.position))
      self.position += delta
    return position_frame(self.position, moving=moving, max_position=self.max_position)

  @property
  def set_position_commands(self) -> List[int]:
    return [struct.unpack_from(">H", d, 8)[0] for d in self.sent if d[3:5] == b"\x03\x01"]


class SimulatedEFW(_SimulatedZWODevice):
  """ A filter wheel, 7 slots unless told otherwise, that needs `settle_polls` slot queries to finish a commanded move.

  Commanding a move of more than one slot forward, or any move backwards, makes the wheel fault
  the way the real one does. `fault_after_steps` makes it fault after that many commanded moves.
  `moving_to` starts the wheel in the middle of a move left over from a previous run.
  `num_slots` is the slot count the wheel reports.
  """

  def __init__(
    self,
    slot: int = 1,
    settle_polls: int = 3,
    info_report: bytes = EXPECTED_INFO_REPORT,
    fault_after_steps: Optional[int] = None,
    moving_to: Optional[int] = None,
    num_slots: int = NUM_SLOTS,
  ):
    super().__init__(product="EFW")
    self.slot = slot
    self.settle_polls = settle_polls
    self.info_report = info_report
    self.fault_after_steps = fault_after_steps
    self.num_slots = num_slots
    self.target = slot if moving_to is None else moving_to
    self.faulted = False
    self._polls_left = 0 if moving_to is None else settle_polls

  def handle_command(self, command: bytes, data: bytes):
    if command != b"\x01\x02":
      super().handle_command(command, data)
      return
    requested = data[5]
    if requested != self.target:
      self.target = requested
      self._polls_left = self.settle_polls
    if requested != (self.slot % self.num_slots) + 1 and requested != self.slot:
      self.faulted = True
    if self.fault_after_steps is not None and len(self.set_slot_commands) > self.fault_after_steps:
      self.faulted = True

  def answer(self, query: Optional[bytes]) -> bytes:
    if query == b"\x02\x04":
      return self.info_report
    assert query == b"\x02\x01", f"unexpected query {query!r}"
    if self.faulted:
      return slot_frame(
        (7, 6, 7), status_code=WHEEL_STATUS_FAULT, error_code=0x0C, num_slots=self.num_slots)
    if self.slot != self.target:
      if self._polls_left > 0:
        self._polls_left -= 1
        return slot_frame(
          (self.slot, self.target, self.slot),
          status_code=WHEEL_STATUS_MOVING,
          num_slots=self.num_slots,
        )
      self.slot = self.target
    return slot_frame((self.slot,) * 3, num_slots=self.num_slots)

  @property
  def set_slot_commands(self) -> List[int]:
    return [d[5] for d in self.sent if d[3:5] == b"\x01\x02"]
