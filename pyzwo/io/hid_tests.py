import unittest
import unittest.mock

from pyzwo.io.errors import TransportError
from pyzwo.io.hid import HID


class _HIDException(Exception):
  pass


class HIDTests(unittest.IsolatedAsyncioTestCase):
  """ Tests for the hidapi wrapper, with the `hid` package mocked out. """

  def setUp(self):
    super().setUp()
    self.mock_hid = unittest.mock.MagicMock()
    self.mock_hid.HIDException = _HIDException
    self.device = self.mock_hid.Device.return_value
    patchers = [
      unittest.mock.patch("pyzwo.io.hid.hid", self.mock_hid, create=True),
      unittest.mock.patch("pyzwo.io.hid.USE_HID", True),
    ]
    for patcher in patchers:
      patcher.start()
      self.addCleanup(patcher.stop)

  async def test_setup_opens_device(self):
    io = HID(vid=0x03C3, pid=0x1F10)
    await io.setup()
    self.mock_hid.Device.assert_called_once_with(vid=0x03C3, pid=0x1F10, serial=None)
    await io.stop()
    self.device.close.assert_called_once()
    self.assertIsNone(io.device)

  async def test_open_failure_is_transport_error(self):
    self.mock_hid.Device.side_effect = _HIDException("unable to open device")
    io = HID(vid=0x03C3, pid=0x1F01)
    with self.assertRaises(TransportError):
      await io.setup()

  async def test_feature_reports(self):
    self.device.send_feature_report.return_value = 16
    self.device.get_feature_report.return_value = b"\x01" + b"\x00" * 15
    io = HID(vid=0x03C3, pid=0x1F10)
    await io.setup()

    written = await io.send_feature_report(b"\x03\x7e\x5a\x02\x03" + b"\x00" * 11)
    self.assertEqual(written, 16)
    self.device.send_feature_report.assert_called_once_with(
      b"\x03\x7e\x5a\x02\x03" + b"\x00" * 11)

    frame = await io.get_feature_report(0x01, 17)
    self.assertEqual(frame, b"\x01" + b"\x00" * 15)
    self.device.get_feature_report.assert_called_once_with(0x01, 17)
    await io.stop()

  async def test_transfer_failure_is_transport_error(self):
    self.device.send_feature_report.side_effect = _HIDException("broken pipe")
    io = HID(vid=0x03C3, pid=0x1F10)
    await io.setup()
    with self.assertRaises(TransportError):
      await io.send_feature_report(b"\x03" + b"\x00" * 15)
    await io.stop()

  async def test_missing_library_is_transport_error(self):
    io = HID(vid=0x03C3, pid=0x1F10)
    with unittest.mock.patch("pyzwo.io.hid.USE_HID", False):
      with self.assertRaises(TransportError):
        await io.setup()
    self.mock_hid.Device.assert_not_called()

  async def test_requires_setup(self):
    io = HID(vid=0x03C3, pid=0x1F10)
    with self.assertRaises(RuntimeError):
      await io.get_feature_report(0x01, 17)

  async def test_strings(self):
    self.device.manufacturer = "ZWO"
    self.device.product = "EFW"
    io = HID(vid=0x03C3, pid=0x1F01)
    self.assertIsNone(io.manufacturer)
    await io.setup()
    self.assertEqual(io.manufacturer, "ZWO")
    self.assertEqual(io.product, "EFW")
    await io.stop()
