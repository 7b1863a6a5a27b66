import unittest
import unittest.mock

from pyzwo.machines.machine import Machine, MachineBackend, need_setup_finished


class TestMachine(unittest.IsolatedAsyncioTestCase):
  class MockBackend(MachineBackend):
    def __init__(self, fail_setup: bool = False):
      self.fail_setup = fail_setup
      self.stopped = 0

    async def setup(self):
      if self.fail_setup:
        raise ValueError("device not found")

    async def stop(self):
      self.stopped += 1

  class MockMachine(Machine):
    @need_setup_finished
    async def do_something(self):
      return 42

  def test_serialize(self):
    m = self.MockMachine(backend=self.MockBackend())
    self.assertEqual(m.serialize(), {"backend": {"type": "MockBackend"}})

  async def test_need_setup_finished(self):
    m = self.MockMachine(backend=self.MockBackend())
    with self.assertRaises(RuntimeError):
      await m.do_something()
    async with m:
      self.assertEqual(await m.do_something(), 42)
    self.assertFalse(m.setup_finished)
    self.assertEqual(m.backend.stopped, 1)

  async def test_failed_setup_releases_backend(self):
    backend = self.MockBackend(fail_setup=True)
    with self.assertRaises(ValueError):
      async with self.MockMachine(backend=backend):
        pass
    self.assertEqual(backend.stopped, 1)

  async def test_stop_is_idempotent(self):
    backend = self.MockBackend()
    m = self.MockMachine(backend=backend)
    await m.setup()
    await m.stop()
    await m.stop()
    self.assertEqual(backend.stopped, 1)
