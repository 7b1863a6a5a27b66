""" Move a ZWO EAF focuser.

  zwoeaf-set                 print the current and the maximum position
  zwoeaf-set 26000           move to an absolute position
  zwoeaf-set -500            move relative to the current position

Progress is printed until the focuser has settled. The last line always holds the current
position. Exits with 0 if the target was reached and 2 otherwise. May need root on Linux.
"""

import argparse
import asyncio
import sys
from typing import List, Optional

from pyzwo.cmd.common import add_common_arguments, configure_from_args, report_outcome, run_machine
from pyzwo.focusing import Focuser, FocuserBackend, ZWOEAFBackend
from pyzwo.zwo.convergence import ConvergenceOutcome, TargetRequest
from pyzwo.zwo.eaf_protocol import FocuserStatus
from pyzwo.zwo.errors import InvalidTargetError


def get_parser() -> argparse.ArgumentParser:
  parser = argparse.ArgumentParser(
    prog="zwoeaf-set",
    description="Move a ZWO EAF focuser to an absolute or relative position.",
  )
  parser.add_argument("position", nargs="?", default=None,
    help="Absolute position, or +N / -N relative to the current position.")
  add_common_arguments(parser)
  return parser


async def run(backend: FocuserBackend, request: Optional[TargetRequest]) -> ConvergenceOutcome:
  """ Report the focuser position and, if `request` is given, move there. """

  async def action(focuser: Focuser) -> ConvergenceOutcome:
    position = focuser.backend.position
    print(f"current pos = {position} (max {focuser.max_position})")
    if request is None:
      return ConvergenceOutcome.reached(position)

    target = request.resolve(position)
    print(f"requesting target {target}", file=sys.stderr)

    def report(status: FocuserStatus):
      print(f"current pos = {status.position} (target {target})")

    return await focuser.move_to(target, on_status=report)

  return await run_machine(Focuser(backend=backend), action)


def main(argv: Optional[List[str]] = None) -> int:
  args = get_parser().parse_args(argv)
  cfg = configure_from_args(args)

  request = None
  if args.position is not None:
    try:
      request = TargetRequest.parse(args.position)
    except InvalidTargetError as e:
      print(e, file=sys.stderr)
      return 2

  backend = ZWOEAFBackend(poll_interval=cfg.polling.interval)
  return report_outcome(asyncio.run(run(backend, request)))


if __name__ == "__main__":
  sys.exit(main())
