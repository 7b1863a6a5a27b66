""" Framing shared by the ZWO EAF and EFW feature reports.

Outbound reports are 16 bytes: report ID 0x03, then the magic "~Z" (0x7e 0x5a) and the command.
Inbound reports are requested with a 17 byte buffer (report ID 0x01 plus 16), but the transfer
length the device reports is 16. Frames are indexed from the report ID byte, so byte 1 is the
first byte of the magic. Asking for any other length makes the device send gibberish.
"""

import logging
from dataclasses import dataclass
from typing import Dict

from pyzwo.zwo.errors import CodecError

logger = logging.getLogger(__name__)

ZWO_USB_VENDOR_ID = 0x03C3

REPORT_LEN = 16
OUT_REPORT_ID = 0x03
IN_REPORT_ID = 0x01
MAGIC = b"\x7e\x5a"


@dataclass(frozen=True)
class FeatureReport:
  """ An outbound feature report. `bytes(report)` is what goes on the wire. """

  report_id: int
  payload: bytes

  def __bytes__(self) -> bytes:
    return bytes([self.report_id]) + self.payload

  def __post_init__(self):
    if len(self.payload) != REPORT_LEN - 1:
      raise CodecError(
        f"Feature report payload must be {REPORT_LEN - 1} bytes, got {len(self.payload)}")


def build_report(command: bytes, body: bytes = b"", trailer: bytes = b"") -> FeatureReport:
  """ Build an outbound report: magic, command, body, zero fill, trailer at the very end. """
  head = MAGIC + command + body
  fill = REPORT_LEN - 1 - len(head) - len(trailer)
  if fill < 0:
    raise CodecError("Feature report contents exceed the report length.")
  return FeatureReport(report_id=OUT_REPORT_ID, payload=head + b"\x00" * fill + trailer)


def require_length(frame: bytes) -> bytes:
  if len(frame) < REPORT_LEN:
    raise CodecError(f"Feature report is {len(frame)} bytes, expected {REPORT_LEN}: {frame.hex()}")
  return bytes(frame[:REPORT_LEN])


def hexdump(frame: bytes) -> str:
  return " ".join(f"{b:02x}" for b in frame)


def check_frame(name: str, frame: bytes, expected: Dict[int, int]) -> bool:
  """ Compare the bytes of `frame` that are believed to be constant against `expected`.

  Several positions are only known from observation, so a mismatch is logged with the whole frame
  and decoding goes on with the trusted fields.

  Args:
    name: Name of the report, used in the warning.
    frame: The inbound frame, starting with the report ID.
    expected: Maps frame offsets to the expected byte value.

  Returns:
    Whether all checked bytes matched.
  """
  if all(frame[offset] == value for offset, value in expected.items()):
    return True
  logger.warning("unexpected values in %s: %s", name, hexdump(frame[:REPORT_LEN]))
  return False


def expect_bytes(offset: int, values: bytes) -> Dict[int, int]:
  return {offset + i: b for i, b in enumerate(values)}
