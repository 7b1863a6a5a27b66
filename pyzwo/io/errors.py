class TransportError(Exception):
  """ Raised when the device cannot be opened or a feature report transfer is cut short.

  A short transfer points at a framing problem rather than a transient error, so these are never
  retried. The device usually needs a physical reset afterwards.
  """
