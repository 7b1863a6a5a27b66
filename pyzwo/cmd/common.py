""" Plumbing shared by the console scripts. """

import argparse
import logging
import sys
from pathlib import Path
from typing import Awaitable, Callable, TypeVar

import pyzwo
from pyzwo.config import DEFAULT_LOADER, Config
from pyzwo.config.file import read_config_file
from pyzwo.io.errors import TransportError
from pyzwo.machines.machine import Machine
from pyzwo.zwo.convergence import ConvergenceOutcome, OutcomeKind
from pyzwo.zwo.errors import InvalidTargetError, ZWOError

M = TypeVar("M", bound=Machine)

_STDERR_HANDLER_NAME = "pyzwo-stderr"


def add_common_arguments(parser: argparse.ArgumentParser):
  parser.add_argument("-v", "--verbose", help="Log protocol details to stderr.",
    action="store_true", default=False)
  parser.add_argument("--config", help="Path to a pyzwo.ini or pyzwo.json config file.",
    type=Path, default=None)


def configure_from_args(args: argparse.Namespace) -> Config:
  """ Apply the config file and set up logging to stderr. Warnings are always shown. """
  cfg = read_config_file(args.config, DEFAULT_LOADER) if args.config is not None else pyzwo.CONFIG
  pyzwo.configure(cfg)

  logger = logging.getLogger("pyzwo")
  if args.verbose:
    logger.setLevel(logging.DEBUG)
  for old in [h for h in logger.handlers if h.get_name() == _STDERR_HANDLER_NAME]:
    logger.removeHandler(old)
  handler = logging.StreamHandler(sys.stderr)
  handler.set_name(_STDERR_HANDLER_NAME)
  handler.setLevel(logging.DEBUG if args.verbose else logging.WARNING)
  handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
  logger.addHandler(handler)
  return cfg


async def run_machine(
  machine: M,
  action: Callable[[M], Awaitable[ConvergenceOutcome]],
) -> ConvergenceOutcome:
  """ Set up `machine`, run `action` and stop the machine again, whatever happened.

  Errors that end a move are turned into an outcome instead of propagating. A bad target aborts,
  everything else the device or the transport raises is a fault.
  """
  try:
    async with machine:
      return await action(machine)
  except InvalidTargetError as e:
    return ConvergenceOutcome.aborted(str(e))
  except (ZWOError, TransportError) as e:
    return ConvergenceOutcome.fault(str(e))


def report_outcome(outcome: ConvergenceOutcome) -> int:
  if outcome.kind is OutcomeKind.FAULT:
    print(f"unrecoverable error: {outcome.reason}", file=sys.stderr)
  elif outcome.kind is OutcomeKind.ABORTED:
    print(outcome.reason, file=sys.stderr)
  return outcome.exit_code

