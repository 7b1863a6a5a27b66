class ZWOError(Exception):
  """ Base class for errors raised while talking to a ZWO accessory. """


class InvalidTargetError(ZWOError, ValueError):
  """ The requested position or slot is malformed or out of range. Raised before any device I/O. """


class CodecError(ZWOError, ValueError):
  """ A feature report could not be encoded or decoded. """


class InvalidSlotError(CodecError):
  """ A filter wheel slot outside of 1..7 was given to the encoder. """


class DeviceFaultError(ZWOError):
  """ The device reported a state it cannot recover from electronically. """

  def __init__(self, message: str):
    super().__init__(f"{message}, needs physical reset")
