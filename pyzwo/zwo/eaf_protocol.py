""" Feature reports of the ZWO EAF focuser.

Captured while moving from 25000 (0x61a8) to 26000 (0x6590):

  out  037e5a02030000000000000000000000   query position
   in  017e5a030000000061a8007fd232ea60
  out  037e5a0301000000659000000002ea60   set position, no response
  out  037e5a02030000000000000000000000
   in  017e5a030100000061d6007fd232ea60   moving, 25046
  ...
   in  017e5a03000000006590007fd232ea60   stable, 26000
"""

import struct
from dataclasses import dataclass

from pyzwo.zwo.errors import CodecError
from pyzwo.zwo.protocol import (
  IN_REPORT_ID,
  MAGIC,
  FeatureReport,
  build_report,
  check_frame,
  expect_bytes,
  require_length,
)

ZWO_USB_PRODUCT_ID_EAF = 0x1F10

MAX_POSITION = 0xFFFF

_SET_POSITION = b"\x03\x01"
_QUERY_POSITION = b"\x02\x03"
_SET_POSITION_TRAILER = b"\x02\xea\x60"


@dataclass(frozen=True)
class FocuserStatus:
  """ A decoded position report.

  `aux1` and `aux2` change between reports but their meaning is unknown. They are kept for
  diagnostics only.
  """

  position: int
  max_position: int
  moving: bool
  aux1: int
  aux2: int


def encode_set_position(position: int) -> FeatureReport:
  if not 0 <= position <= MAX_POSITION:
    raise CodecError(f"Focuser position {position} does not fit in 16 bits.")
  # 7e 5a 03 01 | 00 00 00 | pos_hi pos_lo | 00 00 00 | 02 ea 60
  return build_report(
    _SET_POSITION,
    body=b"\x00" * 3 + struct.pack(">H", position),
    trailer=_SET_POSITION_TRAILER,
  )


def encode_query_position() -> FeatureReport:
  return build_report(_QUERY_POSITION)


_POSITION_REPORT_CONSTANTS = {
  0: IN_REPORT_ID,
  **expect_bytes(1, MAGIC),
  3: 0x03,
  **expect_bytes(5, b"\x00\x00\x00"),
  10: 0x00,
  **expect_bytes(14, b"\xea\x60"),
}


def decode_position_report(frame: bytes) -> FocuserStatus:
  """ Decode the answer to `encode_query_position`.

  Byte 13 holds whatever was left in the device's buffer and is never read.

  Raises:
    CodecError: if the frame is shorter than a report.
  """
  frame = require_length(frame)
  check_frame("position report", frame, _POSITION_REPORT_CONSTANTS)
  position, = struct.unpack_from(">H", frame, 8)
  max_position, = struct.unpack_from(">H", frame, 14)
  return FocuserStatus(
    position=position,
    max_position=max_position,
    moving=frame[4] != 0,
    aux1=frame[11],
    aux2=frame[12],
  )
