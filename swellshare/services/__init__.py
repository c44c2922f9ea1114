from swellshare.services.auth_service import AuthService
from swellshare.services.chat_service import ChatService
from swellshare.services.file_service import FileService
from swellshare.services.payment_service import PaymentService
from swellshare.services.platform_service import PlatformService
from swellshare.services.profile_service import ProfileService
from swellshare.services.rental_service import RentalService
from swellshare.services.surfboard_service import SurfboardService

__all__ = [
    "AuthService",
    "ChatService",
    "FileService",
    "PaymentService",
    "PlatformService",
    "ProfileService",
    "RentalService",
    "SurfboardService",
]
