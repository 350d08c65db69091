from invoicing.core.exceptions import UnsupportedBillingModeError
from invoicing.models.billing_event import BillingModeType
from invoicing.services.billing_modes.base import BillingMode
from invoicing.services.billing_modes.in_advance import InAdvanceBillingMode

_BILLING_MODES: dict[BillingModeType, BillingMode] = {
    BillingModeType.IN_ADVANCE: InAdvanceBillingMode(),
}


def get_billing_mode(mode: BillingModeType) -> BillingMode:
    try:
        return _BILLING_MODES[mode]
    except KeyError:
        raise UnsupportedBillingModeError(f"No billing mode registered for {mode.value}") from None
