""" Move a 7 slot ZWO EFW filter wheel.

  zwoefw-set                 report the current slot, do not move
  zwoefw-set 4               move to slot 4

Only the exit status is meant to be checked: 0 if the wheel made it to the slot, 2 otherwise.
Moving one slot forward takes about 15 seconds. May need root on Linux.
"""

import argparse
import asyncio
import sys
from typing import List, Optional

from pyzwo.cmd.common import add_common_arguments, configure_from_args, report_outcome, run_machine
from pyzwo.filter_wheels import FilterWheel, FilterWheelBackend, ZWOEFWBackend
from pyzwo.zwo.convergence import ConvergenceOutcome
from pyzwo.zwo.efw_protocol import NUM_SLOTS


def slot_argument(value: str) -> int:
  try:
    slot = int(value)
  except ValueError:
    raise argparse.ArgumentTypeError(f"invalid filter slot requested: {value!r}") from None
  if not 1 <= slot <= NUM_SLOTS:
    raise argparse.ArgumentTypeError(f"invalid filter slot requested: {slot}")
  return slot


def get_parser() -> argparse.ArgumentParser:
  parser = argparse.ArgumentParser(
    prog="zwoefw-set",
    description="Move a ZWO EFW filter wheel to a slot.",
  )
  parser.add_argument("slot", nargs="?", default=None, type=slot_argument,
    help=f"Target slot, 1 to {NUM_SLOTS}. Without it the wheel is not moved.")
  add_common_arguments(parser)
  return parser


async def run(backend: FilterWheelBackend, slot: Optional[int]) -> ConvergenceOutcome:
  """ Report the current slot and, if `slot` is given, move there. """

  async def action(wheel: FilterWheel) -> ConvergenceOutcome:
    target = slot if slot is not None else wheel.backend.current_slot

    def report_request(requested: int):
      print(f"request slot {requested}", flush=True)

    def report_step(requested: int, current: int):
      print(f"current slot = {current}")

    outcome = await wheel.move_to_slot(target, on_step=report_step, on_request=report_request)
    print(f"final slot = {outcome.value}")
    return outcome

  return await run_machine(FilterWheel(backend=backend), action)


def main(argv: Optional[List[str]] = None) -> int:
  args = get_parser().parse_args(argv)
  cfg = configure_from_args(args)
  backend = ZWOEFWBackend(
    poll_interval=cfg.polling.interval,
    step_attempts=cfg.polling.wheel_step_attempts,
  )
  return report_outcome(asyncio.run(run(backend, args.slot)))


if __name__ == "__main__":
  sys.exit(main())
