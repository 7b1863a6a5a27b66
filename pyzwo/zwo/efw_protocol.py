""" Feature reports of the ZWO EFW filter wheel (7 slot variant).

  out 03 7e5a 02040000000000000000000000   get info
   in 01 7e5a 04030009004546572d532d3000   ... "EFW-S-0"
  out 03 7e5a 02010000000000000000000000   query slot
   in 01 7e5a 01010001010107000000003000   stable at slot 1 of 7

Slot reports seen in the wild:

  01 7e 5a 01 04 00 03 02 03 07 00 00 00 00 30 00   moving
  01 7e 5a 01 01 00 03 03 03 07 00 00 00 00 30 00   stable at slot 3
  01 7e 5a 01 06 0c 07 06 07 07 00 00 00 00 30 00   stuck, needs a hard reset
"""

from dataclasses import dataclass
from typing import Tuple

from pyzwo.zwo.errors import InvalidSlotError
from pyzwo.zwo.protocol import (
  IN_REPORT_ID,
  MAGIC,
  REPORT_LEN,
  FeatureReport,
  build_report,
  check_frame,
  expect_bytes,
  require_length,
)

ZWO_USB_PRODUCT_ID_EFW = 0x1F01

NUM_SLOTS = 7

_GET_INFO = b"\x02\x04"
_SET_SLOT = b"\x01\x02"
_QUERY_SLOT = b"\x02\x01"

EXPECTED_INFO_REPORT = bytes([
  0x01, 0x7e, 0x5a, 0x04, 0x03, 0x00, 0x09, 0x00,
  0x45, 0x46, 0x57, 0x2d, 0x53, 0x2d, 0x30, 0x00,  # "EFW-S-0"
])


@dataclass(frozen=True)
class WheelStatus:
  """ A decoded slot report.

  The three slot samples only agree once the wheel has settled. `error_code` is nonzero when the
  wheel is stuck; the individual values are not understood.
  """

  status_code: int
  error_code: int
  slot_samples: Tuple[int, int, int]
  num_slots: int

  @property
  def current_slot(self) -> int:
    return self.slot_samples[0]


def encode_get_info() -> FeatureReport:
  return build_report(_GET_INFO)


def decode_info_report(frame: bytes) -> str:
  """ Check the identification report and return the name embedded in it, e.g. "EFW-S-0".

  A mismatch with the known report of the 7 slot wheel is only logged.
  """
  frame = require_length(frame)
  check_frame("info report", frame, dict(enumerate(EXPECTED_INFO_REPORT)))
  name = frame[8:REPORT_LEN].split(b"\x00", 1)[0]
  return name.decode("ascii", errors="replace")


def encode_set_slot(slot: int) -> FeatureReport:
  """ Command the wheel to `slot`. Slots are numbered from 1.

  Raises:
    InvalidSlotError: unless 1 <= slot <= 7.
  """
  if not 1 <= slot <= NUM_SLOTS:
    raise InvalidSlotError(f"Filter slot must be between 1 and {NUM_SLOTS}, got {slot}.")
  return build_report(_SET_SLOT, body=bytes([slot]))


def encode_query_slot() -> FeatureReport:
  return build_report(_QUERY_SLOT)


# the last six bytes look like leftovers from whatever last used that much of the device buffer
_SLOT_REPORT_CONSTANTS = {
  0: IN_REPORT_ID,
  **expect_bytes(1, MAGIC),
  3: 0x01,
  **expect_bytes(10, b"\x00\x00\x00\x00"),
  **expect_bytes(14, b"\x30\x00"),
}


def decode_slot_report(frame: bytes) -> WheelStatus:
  frame = require_length(frame)
  check_frame("position report", frame, _SLOT_REPORT_CONSTANTS)
  return WheelStatus(
    status_code=frame[4],
    error_code=frame[5],
    slot_samples=(frame[6], frame[7], frame[8]),
    num_slots=frame[9],
  )
