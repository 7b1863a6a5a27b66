from .convergence import ConvergenceOutcome, OutcomeKind, TargetRequest
from .eaf_protocol import ZWO_USB_PRODUCT_ID_EAF, FocuserStatus
from .efw_protocol import ZWO_USB_PRODUCT_ID_EFW, WheelStatus
from .errors import (
  CodecError,
  DeviceFaultError,
  InvalidSlotError,
  InvalidTargetError,
  ZWOError,
)
from .protocol import ZWO_USB_VENDOR_ID, FeatureReport
from .status import MotionState, interpret_focuser_status, interpret_wheel_status
