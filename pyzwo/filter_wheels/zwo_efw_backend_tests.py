import itertools
import unittest

from pyzwo.filter_wheels import FilterWheel, ZWOEFWBackend
from pyzwo.filter_wheels.zwo_efw_backend import next_slot
from pyzwo.io.errors import TransportError
from pyzwo.zwo.convergence import OutcomeKind
from pyzwo.zwo.errors import DeviceFaultError, InvalidTargetError
from pyzwo.zwo.simulation import SimulatedEFW, slot_frame
from pyzwo.zwo.status import WHEEL_STATUS_FAULT


class NextSlotTests(unittest.TestCase):
  def test_always_one_forward(self):
    self.assertEqual([next_slot(s, 7) for s in range(1, 8)], [2, 3, 4, 5, 6, 7, 1])


class ZWOEFWBackendTests(unittest.IsolatedAsyncioTestCase):
  """ Tests for the EFW backend against a simulated wheel. """

  def make_wheel(self, device: SimulatedEFW, step_attempts: int = 100) -> FilterWheel:
    backend = ZWOEFWBackend(poll_interval=0, step_attempts=step_attempts)
    backend.io = device
    return FilterWheel(backend=backend)

  async def test_setup(self):
    device = SimulatedEFW(slot=3)
    with self.assertLogs("pyzwo", level="INFO") as cm:
      async with self.make_wheel(device) as wheel:
        self.assertEqual(wheel.backend.info, "EFW-S-0")
        self.assertEqual(wheel.num_slots, 7)
        self.assertEqual(await wheel.get_slot(), 3)
    self.assertIn("INFO:pyzwo:Manufacturer String: ZWO", cm.output)
    self.assertIn("INFO:pyzwo:Product String: EFW", cm.output)
    self.assertEqual(device.sent[0], bytes.fromhex("037e5a02040000000000000000000000"))
    self.assertEqual(device.set_slot_commands, [])
    self.assertEqual(device.close_count, 1)

  async def test_unexpected_info_report_only_warns(self):
    device = SimulatedEFW(info_report=bytes.fromhex("017e5a0403000500") + b"EFW-M-1\x00")
    with self.assertLogs("pyzwo", level="WARNING"):
      async with self.make_wheel(device) as wheel:
        self.assertEqual(wheel.backend.info, "EFW-M-1")

  async def test_setup_waits_for_previous_move(self):
    device = SimulatedEFW(slot=2, moving_to=3, settle_polls=4)
    async with self.make_wheel(device) as wheel:
      self.assertEqual(wheel.backend.current_slot, 3)
    self.assertEqual(device.set_slot_commands, [])

  async def test_fault_during_setup(self):
    device = SimulatedEFW()
    device.responses.extend([
      device.info_report,
      slot_frame((7, 6, 7), status_code=WHEEL_STATUS_FAULT, error_code=0x0C),
    ])
    with self.assertRaises(DeviceFaultError):
      async with self.make_wheel(device):
        pass
    self.assertFalse(device.is_open)

  async def test_wrap_around(self):
    device = SimulatedEFW(slot=7)
    async with self.make_wheel(device) as wheel:
      outcome = await wheel.move_to_slot(1)
    self.assertEqual(outcome.value, 1)
    self.assertEqual(device.set_slot_commands, [1])

  async def test_multi_hop(self):
    device = SimulatedEFW(slot=1)
    steps = []
    # number of set slot commands already sent when each step is announced
    requests = []
    async with self.make_wheel(device) as wheel:
      outcome = await wheel.move_to_slot(
        4,
        on_step=lambda r, c: steps.append((r, c)),
        on_request=lambda r: requests.append((r, len(device.set_slot_commands))),
      )
    self.assertIs(outcome.kind, OutcomeKind.REACHED)
    self.assertEqual(outcome.value, 4)
    self.assertEqual(device.set_slot_commands, [2, 3, 4])
    self.assertEqual(steps, [(2, 2), (3, 3), (4, 4)])
    self.assertEqual(requests, [(2, 0), (3, 1), (4, 2)])
    self.assertFalse(device.faulted)

  async def test_backwards_target_goes_around(self):
    device = SimulatedEFW(slot=5, settle_polls=0)
    async with self.make_wheel(device) as wheel:
      await wheel.move_to_slot(3)
    self.assertEqual(device.set_slot_commands, [6, 7, 1, 2, 3])

  async def test_single_step_invariant(self):
    for start, target in itertools.product(range(1, 8), repeat=2):
      device = SimulatedEFW(slot=start, settle_polls=1)
      async with self.make_wheel(device) as wheel:
        outcome = await wheel.move_to_slot(target)
      self.assertEqual(outcome.value, target)
      self.assertFalse(device.faulted, (start, target))
      previous = start
      for commanded in device.set_slot_commands:
        self.assertEqual(commanded, next_slot(previous, 7), (start, target))
        previous = commanded
      self.assertEqual(len(device.set_slot_commands), (target - start) % 7)

  async def test_no_move_requested(self):
    device = SimulatedEFW(slot=6)
    async with self.make_wheel(device) as wheel:
      outcome = await wheel.move_to_slot(6)
    self.assertEqual(outcome.value, 6)
    self.assertEqual(device.set_slot_commands, [])

  async def test_fault_stops_commands(self):
    device = SimulatedEFW(slot=1, fault_after_steps=1)
    requested = []
    async with self.make_wheel(device) as wheel:
      with self.assertRaises(DeviceFaultError) as cm:
        await wheel.move_to_slot(4, on_request=requested.append)
    self.assertIn("physical reset", str(cm.exception))
    self.assertEqual(device.set_slot_commands, [2, 3])
    # the step that faulted was still announced
    self.assertEqual(requested, [2, 3])
    self.assertEqual(device.close_count, 1)

  async def test_step_attempts_exhausted_keeps_converging(self):
    device = SimulatedEFW(slot=1, settle_polls=3)
    with self.assertLogs("pyzwo", level="WARNING") as cm:
      async with self.make_wheel(device, step_attempts=2) as wheel:
        outcome = await wheel.move_to_slot(2)
    self.assertEqual(outcome.value, 2)
    # the same single step is commanded again, never a bigger jump
    self.assertEqual(device.set_slot_commands, [2, 2])
    self.assertIn("still converging", cm.output[0])

  async def test_invalid_target_sends_nothing(self):
    device = SimulatedEFW(slot=1)
    async with self.make_wheel(device) as wheel:
      for slot in (0, 8):
        with self.assertRaises(InvalidTargetError):
          await wheel.move_to_slot(slot)
    self.assertEqual(device.set_slot_commands, [])

  async def test_short_read_is_transport_error(self):
    device = SimulatedEFW()
    device.responses.append(device.info_report[:8])
    with self.assertRaises(TransportError):
      async with self.make_wheel(device):
        pass
    self.assertEqual(device.close_count, 1)
