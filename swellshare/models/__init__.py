from swellshare.models.message import Message
from swellshare.models.payment import Payment
from swellshare.models.platform_setting import PlatformSetting
from swellshare.models.profile import Profile
from swellshare.models.rental import OPEN_RENTAL_STATUSES, RENTAL_STATUSES, Rental
from swellshare.models.surfboard import Surfboard
from swellshare.models.user import User

__all__ = [
    "User",
    "Profile",
    "Surfboard",
    "Rental",
    "Payment",
    "Message",
    "PlatformSetting",
    "RENTAL_STATUSES",
    "OPEN_RENTAL_STATUSES",
]
