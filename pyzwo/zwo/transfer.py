""" Feature report transactions on a `FeatureReportIO`.

A transaction is atomic on the device side, so a transfer of any length other than a full report
means the framing is off. That is reported as a `TransportError` and never retried.
"""

from pyzwo.io.errors import TransportError
from pyzwo.io.io import FeatureReportIO
from pyzwo.zwo.protocol import IN_REPORT_ID, REPORT_LEN, FeatureReport


async def send_report(io: FeatureReportIO, report: FeatureReport):
  """ Send a command that has no response report. """
  data = bytes(report)
  written = await io.send_feature_report(data)
  if written != REPORT_LEN:
    raise TransportError(f"feature report write returned {written}, expected {REPORT_LEN}")


async def query(io: FeatureReportIO, report: FeatureReport) -> bytes:
  """ Send a query and read back the report the device prepared for it.

  The read buffer has room for the report ID plus a full report, but the device transfers
  `REPORT_LEN` bytes in total.
  """
  await send_report(io, report)
  frame = await io.get_feature_report(IN_REPORT_ID, REPORT_LEN + 1)
  if len(frame) != REPORT_LEN:
    raise TransportError(f"feature report read returned {len(frame)}, expected {REPORT_LEN}")
  return frame
